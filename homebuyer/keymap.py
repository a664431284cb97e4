"""Key bindings: key names to wizard actions.

Keys are plain strings: a single printable character, or a named key such as
"enter", "backspace", "tab", "esc", "left", "right", "up", "down",
"pageup", "pagedown", "ctrl+d", "ctrl+u".
"""

from homebuyer.wizard import actions
from homebuyer.wizard.actions import Action
from homebuyer.wizard.steps import Step

INPUT_KEYS: dict[str, Action] = {
    "enter": actions.ADVANCE,
    "l": actions.ADVANCE,
    "right": actions.ADVANCE,
    "backspace": actions.ERASE,
    "tab": actions.TOGGLE_MODE,
    "esc": actions.RETREAT,
    "h": actions.RETREAT,
    "left": actions.RETREAT,
}

# The first step has nothing to go back to, so its back keys leave
FIRST_STEP_KEYS: dict[str, Action] = {
    **INPUT_KEYS,
    "esc": actions.CANCEL,
    "q": actions.CANCEL,
}

SPREADSHEET_KEYS: dict[str, Action] = {
    "q": actions.QUIT,
    "Q": actions.QUIT,
    "esc": actions.RETREAT,
    "h": actions.RETREAT,
    "left": actions.RETREAT,
    "s": actions.SHOW_SUMMARY,
    "S": actions.SHOW_SUMMARY,
    "e": actions.EXPORT,
    "E": actions.EXPORT,
    "down": actions.NEXT_ROW,
    "j": actions.NEXT_ROW,
    "up": actions.PREVIOUS_ROW,
    "k": actions.PREVIOUS_ROW,
    "pagedown": actions.PAGE_FORWARD,
    "ctrl+d": actions.PAGE_FORWARD,
    "pageup": actions.PAGE_BACKWARD,
    "ctrl+u": actions.PAGE_BACKWARD,
    "g": actions.TOP,
    "G": actions.BOTTOM,
}

SUMMARY_KEYS: dict[str, Action] = {
    "q": actions.QUIT,
    "Q": actions.QUIT,
    "esc": actions.RETREAT,
    "h": actions.RETREAT,
    "left": actions.RETREAT,
    "e": actions.EXPORT,
    "E": actions.EXPORT,
}


def translate(step: Step, key: str) -> Action | None:
    """Map a key on the given step to an action, or None if unbound."""
    if step is Step.SPREADSHEET:
        return SPREADSHEET_KEYS.get(key)
    if step is Step.SUMMARY:
        return SUMMARY_KEYS.get(key)
    if not step.is_input:
        return None

    bindings = FIRST_STEP_KEYS if step is Step.HOUSE_VALUE else INPUT_KEYS
    if key in bindings:
        return bindings[key]
    if len(key) == 1:
        # Filtering happens in the field; unwanted characters are dropped there
        return actions.character_entered(key)
    return None
