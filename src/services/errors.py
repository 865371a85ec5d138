class ServiceError(Exception):
    pass


class AssistDisabledError(ServiceError):
    def __init__(self, message: str = (
        "AI features are disabled in production. Use Ollama locally or set "
        "OLLAMA_URL environment variable."
    )):
        super().__init__(message)


class AssistUnavailableError(ServiceError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"Completion backend unreachable at {url}: {reason}")
        self.url = url
        self.reason = reason


class AssistBackendError(ServiceError):
    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(f"Completion backend error: {reason}")
        self.reason = reason
        self.status_code = status_code


class MailNotConfiguredError(ServiceError):
    pass


class MailDeliveryError(ServiceError):
    def __init__(self, recipient: str, reason: str):
        super().__init__(f"Failed to send mail to {recipient}: {reason}")
        self.recipient = recipient
        self.reason = reason
