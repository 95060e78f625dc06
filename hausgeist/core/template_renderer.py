"""Literal ``{{key}}`` substitution for rule message templates."""

from collections.abc import Mapping


def render_template(template: str, variables: Mapping[str, object]) -> str:
    """Replace each ``{{key}}`` token with its value.

    Tokens without a matching key are left as written. Values are inserted
    verbatim, so a value containing ``{{other}}`` is not expanded again.

    Args:
        template: Text with ``{{var}}`` placeholders
        variables: Values keyed by placeholder name

    Returns:
        Rendered text
    """
    parts = template.split("{{")
    rendered = [parts[0]]
    for part in parts[1:]:
        key, sep, rest = part.partition("}}")
        if sep and key in variables:
            rendered.append(f"{variables[key]}{rest}")
        else:
            rendered.append("{{" + part)
    return "".join(rendered)
