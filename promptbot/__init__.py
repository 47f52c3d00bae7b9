"""PromptBot - Counter echo bot with a confirmed reset

Echoes every message with a running counter and asks a yes/no question before
resetting the counter. Conversation state lives in a serialisable session that
the runtime loads and saves between turns, so a transport (console, HTTP) can
be swapped without touching the dialog logic.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
