from collections.abc import Mapping

from locale_routing.core.config import AutoDetectMethod, LocaleConfig
from locale_routing.i18n.detector import detect_from_header


class LocaleRegistry:
    """Read-only view over a LocaleConfig: which locales exist and which to fall back to."""

    def __init__(self, config: LocaleConfig) -> None:
        self.config = config

    @property
    def available_locales(self) -> list[str]:
        return list(self.config.available_locales)

    @property
    def default_locale(self) -> str:
        return self.config.default_locale

    @property
    def fallback_locale(self) -> str:
        return self.config.fallback_locale

    @property
    def auto_detect_enabled(self) -> bool:
        return self.config.auto_detect_enabled

    def is_available(self, locale: str | None) -> bool:
        return locale is not None and locale in self.config.available_locales

    def detect_locale(self, headers: Mapping[str, str]) -> str | None:
        """Detect a client locale using the configured auto-detect method."""
        match self.config.auto_detect_method:
            case AutoDetectMethod.BROWSER:
                return detect_from_header(
                    headers.get("accept-language"), self.config.available_locales
                )
            case _:
                return self.default_locale

    def redirect_locale(self, headers: Mapping[str, str]) -> str:
        """Locale to send a request to when its URL carries none."""
        if self.auto_detect_enabled:
            return self.detect_locale(headers) or self.default_locale
        return self.default_locale
