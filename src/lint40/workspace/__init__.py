from lint40.workspace.memory import InMemoryDiagnosticsSink, InMemoryDocument

__all__ = [
    "InMemoryDiagnosticsSink",
    "InMemoryDocument",
]
