import re

PLACEHOLDER = re.compile(r":(\w+):")


def format_message(template: str, field: str, names=(), values=()) -> str:
    """
    Replace ``:name:`` placeholders in an error template.

    Positional ``values`` fill the placeholders listed in ``names``; missing
    positions become an empty string. ``:field:`` is the field name unless a
    parameter of the same name is declared. Replacement happens in one pass,
    so substituted text is never scanned again.
    """
    replacements = {"field": field}
    for index, name in enumerate(names):
        replacements[name] = values[index] if index < len(values) else ""

    def substitute(match):
        key = match.group(1)
        if key in replacements:
            return str(replacements[key])
        return match.group(0)

    return PLACEHOLDER.sub(substitute, template)
