class FatalConfigurationError(RuntimeError):
    """No usable store handle: a report cannot be built at all."""
