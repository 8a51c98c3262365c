"""Per-request context shared across every matching route.

The dispatcher creates one ``Context`` per request and lends it, by
reference, to each handler it executes. An early route (for example an
authentication layer matching ``^/``) can set ``context.user`` for a
later resource route to read. A context never outlives its request.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Context:
    """Mutable carrier for validated request data.

    ``body``, ``params``, and ``query`` are filled by the executor when
    the matching schema is declared; otherwise they stay ``None``.
    ``user`` is never touched by perch itself.
    """

    user: Any = None
    body: Any = None
    query: Any = None
    params: Any = None
