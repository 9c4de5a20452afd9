"""Policy agent exceptions."""


class PolicyAgentError(Exception):
    """Base class for failures evaluating a policy."""


class QueryMissingPathConfigError(PolicyAgentError):
    """Raised when the policy path for a key was not configured."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key {key} missing from path config supplied to the policy agent client.")


class QueryRequestError(PolicyAgentError):
    """Raised when the request to the policy agent could not be performed."""

    def __init__(self, err: Exception):
        self.err = err
        super().__init__(f"an error occurred while performing a query request to the policy engine: {err}.")


class QueryResponseReadingError(PolicyAgentError):
    """Raised when the policy agent answered with an unusable response."""

    def __init__(self, err: Exception | str):
        self.err = err
        super().__init__(f"an error occurred while reading a response from the policy engine: {err}.")


class DecisionUnmarshallError(PolicyAgentError):
    """Raised when the decision body is not valid JSON."""

    def __init__(self, err: Exception):
        self.err = err
        super().__init__(
            f"an error occurred while attempting to unmarshall a decision from the policy engine: {err}."
        )


class DecisionPayloadError(PolicyAgentError):
    """Raised when the decision JSON does not have the expected shape."""

    def __init__(self, msg: str):
        self.msg = msg
        super().__init__(f"there was a problem with the decision payload: {msg}.")
