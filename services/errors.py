class ChartConfigurationError(ValueError):
    """Chart config that cannot be shaped or rendered (unknown kind, unset or foreign axis)."""


class ChartConfigNotFoundError(KeyError):
    """No chart config at the requested index for this session."""


class SheetNotLoadedError(KeyError):
    """Workbook or sheet not present in the in-memory cache."""
