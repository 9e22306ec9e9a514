"""Shell integration for gw.

A child process cannot change its parent's working directory, so gw
prints the directory to stdout and a shell function does the cd.
"""

SUPPORTED_SHELLS = ("bash", "zsh")

POSIX_FUNCTION = """\
gw() {
    local gw_output gw_status
    gw_output="$(command gw "$@")"
    gw_status=$?
    if [ -n "$gw_output" ] && [ -d "$gw_output" ]; then
        cd "$gw_output" || return
    elif [ -n "$gw_output" ]; then
        printf '%s\\n' "$gw_output"
    fi
    return $gw_status
}
"""


def shell_init(shell: str = "bash") -> str:
    """Return the wrapper function for shell.

    Raises:
        ValueError: If shell is not supported
    """
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(f"Unsupported shell '{shell}', expected one of {', '.join(SUPPORTED_SHELLS)}")
    return POSIX_FUNCTION
