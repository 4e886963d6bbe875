from __future__ import annotations

from fastapi import Request

from lint40.core.session import LintSession


def get_session(request: Request) -> LintSession:
    """Return the ``LintSession`` owned by the running application."""
    session: LintSession = request.app.state.session
    return session
