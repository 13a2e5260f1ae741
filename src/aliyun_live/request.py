"""Request builder for Live API actions."""

DescribeLiveStreamsPublishListAction = "DescribeLiveStreamsPublishList"
DescribeLiveStreamsOnlineListAction = "DescribeLiveStreamsOnlineList"
DescribeLiveStreamsBlockListAction = "DescribeLiveStreamsBlockList"
DescribeLiveStreamsControlHistoryAction = "DescribeLiveStreamsControlHistory"
ForbidLiveStreamAction = "ForbidLiveStream"
ResumeLiveStreamAction = "ResumeLiveStream"


class Request:
    """An RPC request: action name plus its parameters."""

    def __init__(self, action: str = "", args: dict[str, str] | None = None):
        self.action = action
        self.args: dict[str, str] = dict(args or {})

    def set_args(self, key: str, value: str) -> "Request":
        """Store a parameter, overwriting any previous value for the key."""
        self.args[key] = value
        return self

    def set_action(self, action: str) -> "Request":
        """Change the action of this request. Existing clones are not affected."""
        self.action = action
        return self

    def clone(self) -> "Request":
        """Return a copy with its own argument bag."""
        return Request(self.action, self.args)

    def to_params(self) -> dict[str, str]:
        """Action parameters, without the common signing parameters."""
        params = {"Action": self.action}
        params.update(self.args)
        return params

    def __repr__(self) -> str:
        return f"{type(self).__name__}(action={self.action!r}, args={self.args!r})"


class LiveRequest(Request):
    """
    Request carrying the Live API's per-domain fields.

    ``DomainName`` is always sent; ``AppName`` is omitted when empty.
    """

    def __init__(
        self,
        action: str = "",
        domain_name: str = "",
        app_name: str = "",
        args: dict[str, str] | None = None,
    ):
        super().__init__(action, args)
        self.domain_name = domain_name
        self.app_name = app_name

    def clone(self) -> "LiveRequest":
        return LiveRequest(self.action, self.domain_name, self.app_name, self.args)

    def to_params(self) -> dict[str, str]:
        params = {"Action": self.action, "DomainName": self.domain_name}
        if self.app_name:
            params["AppName"] = self.app_name
        params.update(self.args)
        return params

    def __repr__(self) -> str:
        return (
            f"LiveRequest(action={self.action!r}, domain_name={self.domain_name!r}, "
            f"app_name={self.app_name!r}, args={self.args!r})"
        )


def new_live_request(action: str, domain_name: str, app_name: str = "") -> LiveRequest:
    """Build a fresh request for a single call."""
    return LiveRequest(action, domain_name, app_name)
