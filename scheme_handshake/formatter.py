from datetime import date
from typing import Iterable

from scheme_handshake.endpoint import Endpoint


def format_session_report(endpoints: Iterable[Endpoint], history: list[str]) -> str:
    """Format endpoint session state and dispatch history into a Markdown report."""
    sections = [f"# Handshake Session Report\n\n*Generated {date.today()}*\n"]

    sections.append("## Endpoints\n")
    sections.append("| Scheme | Phase | Identifier | Invocations |")
    sections.append("|---|---|---|---|")
    for ep in endpoints:
        identifier = f"`{ep.state.identifier}`" if ep.state.identifier else "-"
        sections.append(
            f"| {ep.scheme} | {ep.state.phase} | {identifier} | {ep.state.invocation_count} |"
        )
    sections.append("")

    if history:
        sections.append("## Dispatched\n")
        for i, url in enumerate(history, 1):
            sections.append(f"{i}. `{url}`")
        sections.append("")

    return "\n".join(sections)
