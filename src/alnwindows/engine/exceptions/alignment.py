class AlignmentAnalysisException(Exception):
    pass

class FormatError(AlignmentAnalysisException, ValueError):
    def __init__(self, reason: str, source: str = "alignment"):
        self.source = source
        super().__init__(f"{source}: {reason}")

class RangeError(AlignmentAnalysisException, IndexError):
    def __init__(self, start: int, size: int, limit: int):
        self.start = start
        self.size = size
        self.limit = limit
        super().__init__(f"Window starting at {start} with size {size} is out of range for a length of {limit}.")

class AlignmentError(AlignmentAnalysisException, ValueError):
    pass

class ConfigurationError(AlignmentAnalysisException, ValueError):
    pass
