"""Domain layer for ledgerchart."""


# ChartService imports config, which imports domain errors; load it lazily.
def __getattr__(name):
    if name == "ChartService":
        from ledgerchart.domain.report import ChartService
        return ChartService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
