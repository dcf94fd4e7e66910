import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

CONTEXTS = ["identity", "catalogue", "ordering"]


def _install(session: nox.Session, *extras: str) -> None:
    """Install the project with its test extra (plus any others) into the nox virtualenv."""
    session.install("-e", f".[{','.join(('test', *extras))}]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run("pytest", *[f"tests/{context}/domain/" for context in CONTEXTS])


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_postgres(session: nox.Session) -> None:
    """Run the suite against PostgreSQL; DATABASE_URL must point at a scratch database."""
    _install(session, "postgresql")
    session.run("pytest", "--env", "production", *session.posargs)
