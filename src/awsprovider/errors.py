class AWSProviderError(Exception):
    """
    base class for errors raised by the adapter itself.
    botocore failures from storage calls are not wrapped.
    """


class NotInitializedError(AWSProviderError):
    """
    raised when an operation is called before initialize()
    or after close().
    """

    def __init__(self, operation: "str") -> "None":
        super().__init__(
            f"{operation} called before the provider was initialized"
        )
        self.operation = operation
