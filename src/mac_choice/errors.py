from __future__ import annotations


class MacChoiceError(Exception):
    """
    Base error. Every subclass carries a stable process exit code.
    """

    exit_code = 10


class InterfaceNotSupplied(MacChoiceError):
    exit_code = 1

    def __init__(self) -> None:
        super().__init__("you didn't tell me for which interface")


class TooManyParameters(MacChoiceError):
    exit_code = 2

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"expected 1 or 2 parameters, got {count}")


class PatternNotFound(MacChoiceError):
    exit_code = 3

    def __init__(self, search: str, interface: str) -> None:
        self.search = search
        self.interface = interface
        super().__init__(
            f"pattern to match {search!r} was not found for interface {interface}"
        )


class InvalidInterfaceName(MacChoiceError):
    exit_code = 4

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f'invalid interface "{name}" requested.\n'
            f"       available interfaces are: {' '.join(available)}"
        )


class InterfaceDownFailed(MacChoiceError):
    exit_code = 5

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"aborting. failed to bring {name} down,\n"
            "       mac address was not changed\n"
            "       Are you running this with sudo?"
        )


class AddressApplyFailed(MacChoiceError):
    exit_code = 6

    def __init__(self, name: str, address: str) -> None:
        self.name = name
        self.address = address
        super().__init__(
            f"setting {address} on {name} failed,\n"
            f"       mac address was not changed, interface {name} is down"
        )


class RegistryNotFound(MacChoiceError):
    exit_code = 7

    def __init__(self, paths: list[str] | None = None) -> None:
        self.paths = paths or []
        where = f" (looked in: {', '.join(self.paths)})" if self.paths else ""
        super().__init__(f"can not find oui list{where}\n       mac address was not changed")


class InterfaceUpFailed(MacChoiceError):
    exit_code = 8

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"failed to bring {name} up, but change\n"
            f"       of mac address was successful, interface {name} is still down"
        )


class RecordNotFound(MacChoiceError):
    exit_code = 9

    def __init__(self, line_number: int, count: int) -> None:
        self.line_number = line_number
        self.count = count
        super().__init__(
            f"no survey entry on line {line_number} ({count} entries available)\n"
            "       mac address was not changed"
        )


class SurveyNotFound(MacChoiceError):
    exit_code = 11

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"can not find survey file {path}\n       mac address was not changed")
