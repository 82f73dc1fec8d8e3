"""Repository wrappers that fail selected calls, to simulate data-service errors."""


class RemoteDown(Exception):
    """Stand-in for a failed remote call."""


class FailingRepo:
    """Delegate to a real repository, raising RemoteDown for the named methods.

    ``calls`` records every method invoked, failing or not, in order.
    """

    def __init__(self, inner, *fail_methods: str, message: str = "connection reset"):
        self._inner = inner
        self._fail = set(fail_methods)
        self._message = message
        self.calls: list[str] = []

    def __getattr__(self, name):
        attr = getattr(self._inner, name)
        if not callable(attr):
            return attr

        async def wrapper(*args, **kwargs):
            self.calls.append(name)
            if name in self._fail:
                raise RemoteDown(self._message)
            return await attr(*args, **kwargs)

        return wrapper
