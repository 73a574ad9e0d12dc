"""
Completion candidate sets attached to options.

Shell-completion scripts are generated elsewhere; this module only describes
*what* an option completes to, so a completion generator can ask any option
for its candidates:

- CompletionCandidates.NONE      no completion
- CompletionCandidates.PATH      file system paths
- CompletionCandidates.HOSTNAME  host names
- CompletionCandidates.USERNAME  user names
- CompletionCandidates.fixed(*choices)  a fixed set of words (used by choice())
"""
from rich.text import Text


class CompletionCandidates:
    __slots__ = ("_kind", "_candidates")

    NONE: "CompletionCandidates"
    PATH: "CompletionCandidates"
    HOSTNAME: "CompletionCandidates"
    USERNAME: "CompletionCandidates"

    def __init__(self, kind, candidates=(), /):
        if kind not in ("none", "path", "hostname", "username", "fixed"):
            raise ValueError("unknown completion kind %r" % kind)
        if kind != "fixed" and candidates:
            raise TypeError("only fixed completions carry candidates")
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_candidates", tuple(dict.fromkeys(map(str, candidates))))

    @classmethod
    def fixed(cls, *candidates):
        return cls("fixed", candidates)

    @property
    def kind(self):
        return self._kind

    @property
    def candidates(self):
        return self._candidates

    def __setattr__(self, name, value, /):
        raise AttributeError("completion candidates are immutable")

    def __eq__(self, other):
        if not isinstance(other, CompletionCandidates):
            return NotImplemented
        return (self._kind, self._candidates) == (other._kind, other._candidates)

    def __hash__(self):
        return hash((self._kind, self._candidates))

    def __bool__(self):
        return self._kind != "none"

    def __repr__(self):
        if self._kind == "fixed":
            return "completion(fixed=%r)" % list(self._candidates)
        return "completion(%s)" % self._kind

    def __rich__(self):
        return Text(repr(self), style="dim")


CompletionCandidates.NONE = CompletionCandidates("none")
CompletionCandidates.PATH = CompletionCandidates("path")
CompletionCandidates.HOSTNAME = CompletionCandidates("hostname")
CompletionCandidates.USERNAME = CompletionCandidates("username")


__all__ = (
    "CompletionCandidates",
)
