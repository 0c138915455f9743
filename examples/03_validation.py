from __future__ import annotations

from _infra import banner

from effectstack import io_either as IOE
from effectstack.semigroup import get_list_semigroup
from kungfu import Error, Ok

V = IOE.get_io_validation(get_list_semigroup())


def required(field: str, value: str) -> IOE.IOEither[str, list[str]]:
    return IOE.from_predicate(value, bool, lambda _: [f"{field}: required"])


def email(value: str) -> IOE.IOEither[str, list[str]]:
    return IOE.filter_or_else(required("email", value), lambda v: "@" in v, lambda v: [f"email: {v!r} has no @"])


def signup(name: str, address: str) -> IOE.IOEither[tuple[str, str], list[str]]:
    # ap collects failures from both fields instead of stopping at the first
    return V.ap(V.map(required("name", name), lambda n: lambda a: (n, a)), email(address))


def main() -> None:
    banner("03_validation: accumulate failures with ValidationT")

    for name, address in (("ada", "ada@example.com"), ("", "nope"), ("bob", "")):
        match signup(name, address)():
            case Ok((n, a)):
                print(f"ok: {n} <{a}>")
            case Error(problems):
                print("rejected: " + "; ".join(problems))


if __name__ == "__main__":
    main()
