"""
Nox scripts the environment our tests run in. A few commands to check out:

    nox                        Run all sessions.
    nox -l                     List all sessions.
    nox -s <session>           Run a specific session.
    nox ... -- --wheel         Run tests against the wheel in dist.
    nox -h                     Get help.
"""

import glob

import nox

# much faster than pip
nox.options.default_venv_backend = "uv"

SRC_DIR = "lrukit"
CLI_DIR = "lrukit/cli"

SILENT_INSTALLS = True

# The minimal set of dependencies we need to run tests.
BASE_TEST_DEPS = ("pytest",)


@nox.session()
def test_core(session):
    """Unit tests that live beside the library modules."""
    _install_test_deps(session)
    session.run("pytest", f"src/{SRC_DIR}", f"--ignore=src/{CLI_DIR}", *_pytest_args(session))


@nox.session()
def test_cli(session):
    """Tests for configuration, traces and the command line."""
    _install_test_deps(session)
    session.run("pytest", "tests", *_pytest_args(session))


@nox.session()
def bench(session):
    session.install(".", silent=SILENT_INSTALLS)
    session.run("python", "benchmarks/perf.py")


def _install_test_deps(session):
    # Choose the way we'll install lrukit ... wheel or source.
    install_wheel = "--wheel" in session.posargs
    pkg = _get_wheel() if install_wheel else "."
    session.install(pkg, *BASE_TEST_DEPS)

    # Sanity check we have installed lrukit.
    session.run("python", "-c", "import lrukit")


def _get_wheel():
    path = "dist/lrukit-*.whl"
    wheels = glob.glob(path)
    if len(wheels) != 1:
        msg = f"There should be one wheel in {path}. Got {len(wheels)}"
        raise Exception(msg)
    return wheels[0]


def _pytest_args(session):
    return [a for a in session.posargs if a != "--wheel"]
