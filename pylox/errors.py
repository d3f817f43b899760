class LoxRuntimeError(RuntimeError):
    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class Return(Exception):
    def __init__(self, value):
        super().__init__()
        self.value = value
