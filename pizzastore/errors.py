# error taxonomy shared by the storage gateway, engines and menu loop

class PizzaStoreError(Exception):
    """base for every failure the menu loop knows how to report"""
    message = "something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class NotFound(PizzaStoreError):
    """referenced login / item does not exist"""
    message = "not found"


class Unauthorized(PizzaStoreError):
    """caller's role does not allow the requested mutation"""
    message = "not allowed"


class ValidationFailure(PizzaStoreError):
    """malformed input from the prompt boundary"""
    message = "invalid input"


class StorageFailure(PizzaStoreError):
    """any database error (connectivity, constraint violation, ...)"""
    message = "database error"


class FatalStartup(PizzaStoreError):
    """cannot connect / configure at launch; ends the process"""
    message = "unable to start"
