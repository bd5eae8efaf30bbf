from .cipher import CipherOperation, LocatedRoutine, OperationKind, OperationSequence
from .failures import Failure, FailureKind, Outcome
from .links import CipherPayload, FormatEntry, ResolutionResult, ResolvedLink

__all__ = [
    "CipherOperation",
    "CipherPayload",
    "Failure",
    "FailureKind",
    "FormatEntry",
    "LocatedRoutine",
    "OperationKind",
    "OperationSequence",
    "Outcome",
    "ResolutionResult",
    "ResolvedLink",
]
