class ReadError(Exception):
    pass


class UnexpectedEOFError(ReadError):
    pass


class WriteError(Exception):
    pass


class CapacityError(WriteError):
    pass
