"""Route key strokes from a host to the editor session."""

from __future__ import annotations

from typing import Optional

from caret_engine.buffer import EditorSession, EditResult
from caret_engine.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    load_default_keymaps,
)
from caret_engine.runtime import telemetry


class KeyDispatcher:
    """Resolves key strokes and runs the bound action against a session.

    The dispatcher is handed the session explicitly; there is no global
    editor instance behind it.
    """

    def __init__(
        self,
        session: EditorSession,
        *,
        registry: Optional[KeymapRegistry] = None,
        resolver: Optional[KeymapResolver] = None,
    ) -> None:
        self.session = session
        if registry is None:
            registry = resolver.registry if resolver is not None else None
        if registry is None:
            registry = KeymapRegistry(logger_name="caret_engine.keymaps")
            load_default_keymaps(registry)
        self.registry = registry
        self.resolver = resolver or KeymapResolver(
            registry, logger_name="caret_engine.keymaps"
        )
        self.logger = telemetry.get_logger("caret_engine.dispatch")

    def handle_key(self, stroke: KeyStroke) -> EditResult:
        result = self.resolver.resolve(stroke)
        if result.match is None:
            return EditResult(
                action="unbound",
                changed=False,
                offset=self.session.cursor.offset,
                version=self.session.buffer.version,
            )
        return self._execute(result.match, stroke)

    def press(self, token: str, *, text: Optional[str] = None) -> EditResult:
        """Shorthand for ``handle_key(KeyStroke.parse(token, text=text))``."""

        return self.handle_key(KeyStroke.parse(token, text=text))

    def type_text(self, text: str) -> list[EditResult]:
        """Feed ``text`` one character at a time, line endings as ENTER."""

        results = []
        for char in text:
            if char == self.session.line_ending:
                results.append(self.press("ENTER"))
            else:
                results.append(self.press(char, text=char))
        return results

    def _execute(self, match: ResolutionMatch, stroke: KeyStroke) -> EditResult:
        binding_id = match.binding.id if match.binding else "text"
        with telemetry.span(
            "dispatch::execute",
            component="dispatch",
            metadata={"binding_id": binding_id, "action": match.action.id},
        ):
            outcome = match.action(self.session, stroke)

        if isinstance(outcome, EditResult):
            return outcome
        return EditResult(
            action=match.action.id,
            changed=True,
            offset=self.session.cursor.offset,
            version=self.session.buffer.version,
        )


__all__ = ["KeyDispatcher"]
