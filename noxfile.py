"""Nox sessions for tests and static type checking."""

from __future__ import annotations

import nox


@nox.session(python="3.12")
def tests(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", "-q", *session.posargs)


@nox.session(python=False)
def mypy(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("mypy", "src/argcascade", *session.posargs)


@nox.session(python=False)
def pyright(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("pyright", "src/argcascade", *session.posargs)


# Alias with version suffix for CI convenience
@nox.session(name="tests-3.13", python="3.13")
def tests_313(session: nox.Session) -> None:
    tests(session)
