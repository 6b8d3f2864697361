import nox
from nox.sessions import Session

nox.options.sessions = ["lint", "test"]
locations = "fixarm", "test"


@nox.session(python=["3.11"])
def test(session: Session) -> None:
    args = session.posargs or ["test"]
    session.install("-e", ".[test]")
    session.run("pytest", *args)


@nox.session(python=["3.11"])
def lint(session: Session) -> None:
    args = session.posargs or locations
    session.install("-e", ".[test]")
    session.run("black", "--line-length", "120", "--check", "--diff", "--target-version", "py39", *args)
    session.run("flake8", "--max-line-length", "120", "fixarm")
    session.run("mypy", "--install-types", "--non-interactive", "--python-version", "3.9", "--strict", "fixarm")
