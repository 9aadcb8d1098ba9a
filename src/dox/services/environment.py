"""Environment propagation for downstream CI steps."""

import os


def teamcity_message(name: str, value: str) -> str:
    """Build a TeamCity setParameter service message."""
    return f"##teamcity[setParameter name='{_escape(name)}' value='{_escape(value)}']"


def _escape(value: str) -> str:
    # TeamCity service message escaping; the pipe must go first
    for raw, escaped in (
        ("|", "||"),
        ("'", "|'"),
        ("\n", "|n"),
        ("\r", "|r"),
        ("[", "|["),
        ("]", "|]"),
    ):
        value = value.replace(raw, escaped)
    return value


def set_environment_variable(name: str, value: str, teamcity: bool, user_env: bool) -> None:
    """Expose a variable to whatever runs after dox.

    Args:
        name: Variable name
        value: Variable value
        teamcity: Emit a TeamCity service message on stdout
        user_env: Set the variable in the current process environment
    """
    if teamcity:
        # Service messages are read from stdout
        print(teamcity_message(name, value), flush=True)
    if user_env:
        os.environ[name] = value
