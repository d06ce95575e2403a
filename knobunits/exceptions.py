class KnobUnitsError(Exception):
    pass


class MalformedSizeError(KnobUnitsError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__("Can't convert [{}]".format(value))


class MalformedDurationError(KnobUnitsError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__('Invalid duration format: "{}"'.format(value))


class ConversionError(KnobUnitsError, TypeError):
    def __init__(self, value, target: str):
        self.value = value
        self.target = target
        super().__init__("Can't convert [{!r}] to {}".format(value, target))
