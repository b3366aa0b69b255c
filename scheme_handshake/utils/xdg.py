import subprocess

XDG_MIME = "xdg-mime"
XDG_OPEN = "xdg-open"


def query_scheme_handler(scheme: str, timeout: float = 5) -> str | None:
    """Return the desktop file registered for x-scheme-handler/<scheme>, or None.

    A failing query or empty answer returns None. Missing xdg-utils or a
    timeout raises OSError.
    """
    try:
        result = subprocess.run(
            [XDG_MIME, "query", "default", f"x-scheme-handler/{scheme}"],
            capture_output=True, text=True, timeout=timeout,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise OSError(f"{XDG_MIME} query failed for {scheme!r}: {e}") from e
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def open_url(url: str, timeout: float = 5) -> None:
    """Hand url to xdg-open, which returns once the handler has been spawned.

    Raises OSError if xdg-open is missing, times out or exits non-zero.
    """
    try:
        subprocess.run(
            [XDG_OPEN, url],
            capture_output=True, text=True, check=True, timeout=timeout,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise OSError(f"{XDG_OPEN} failed for {url!r}: {e}") from e
