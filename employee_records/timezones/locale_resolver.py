"""Country code to locale tag, used for the Content-Language of API responses."""

from typing import Mapping, Optional

from employee_records.config.settings import AppSettings


class LocaleResolver:
    def __init__(self, locales: Mapping[str, str], default_locale: str) -> None:
        self._locales = {code.upper(): tag for code, tag in locales.items()}
        self._default_locale = default_locale

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "LocaleResolver":
        return cls(settings.locales, settings.default_locale)

    def resolve(self, country_code: Optional[str]) -> str:
        if not country_code:
            return self._default_locale
        return self._locales.get(country_code.strip().upper(), self._default_locale)
