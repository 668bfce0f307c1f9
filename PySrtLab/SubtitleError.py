class SubtitleError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class SubtitleParseError(SubtitleError):
    """Raised when subtitle content cannot be parsed"""
    pass

class TooManyMalformedLinesError(SubtitleParseError):
    """
    Raised when a source contains more unrecognised lines than the parser will tolerate,
    which usually means it is not an SRT file at all.
    """
    def __init__(self, source : str|None, count : int):
        super().__init__(f"Too many unparseable lines ({count}) in {source or 'input'}, this file probably has bad syntax or is not an SRT file")
        self.source = source
        self.count = count

class TimestampFormatError(SubtitleError, ValueError):
    """Raised when a value is neither floating-point seconds nor [-]HH:MM:SS[.,]mmm"""
    def __init__(self, value : str):
        super().__init__(f"Time values must be a floating-point number or [-]HH:MM:SS.sss, got '{value}'")
        self.value = value

class LinearFitError(SubtitleError):
    pass

class DegenerateInputError(LinearFitError):
    """Raised when reference times cannot determine a unique scale and offset"""
    pass

class InsufficientDataError(LinearFitError):
    """Raised when there are too few valid time pairs to fit a line"""
    pass
