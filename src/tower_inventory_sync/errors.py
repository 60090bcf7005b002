"""Exception hierarchy for Tower inventory synchronisation."""


class TowerError(Exception):
    """Base class for every terminal failure of a sync run."""


class ConfigurationError(TowerError):
    """A required Tower setting is missing or invalid."""


class TransportError(TowerError):
    """The HTTP request did not produce a response."""


class ApiError(TowerError):
    """Tower answered with a non-2xx status code."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(TowerError):
    """A 2xx response body could not be decoded as JSON."""


class InventoryNotFoundError(TowerError):
    """No inventory matches the configured name."""


class VmNotFoundError(TowerError):
    """No VM descriptor was supplied."""


class HostnameUnresolvedError(TowerError):
    """Neither a hostname nor a VM name is available."""


class NoIpAddressError(TowerError):
    """The VM has no IP address to register as ansible_host."""


class UpsertFailedError(TowerError):
    """Creating or updating the host record was rejected."""


class VerificationFailedError(TowerError):
    """The host is still absent from the inventory after the upsert."""


# Process exit codes, one per failure class. 0 is success.
EXIT_CODES: dict[type[TowerError], int] = {
    ConfigurationError: 2,
    TransportError: 3,
    ApiError: 4,
    MalformedResponseError: 5,
    InventoryNotFoundError: 6,
    VmNotFoundError: 7,
    HostnameUnresolvedError: 8,
    NoIpAddressError: 9,
    UpsertFailedError: 10,
    VerificationFailedError: 11,
}


def exit_code_for(error: TowerError) -> int:
    """Return the process exit code for a sync failure."""
    for cls in type(error).__mro__:
        if cls in EXIT_CODES:
            return EXIT_CODES[cls]
    return 1
