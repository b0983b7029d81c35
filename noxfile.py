import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with all test extras into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no handlers, no API)."""
    _install(session)
    session.run("pytest", "tests/ordersync/domain/")


@nox.session(python=PYTHON_VERSIONS)
def tests_propagation(session: nox.Session) -> None:
    """Run the end-to-end propagation and API tests."""
    _install(session)
    session.run("pytest", "tests/ordersync/integration/", "tests/ordersync/bdd/")
