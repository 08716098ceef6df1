"""
Naming helpers shared by the schema model and the OpenAPI importer.

Table names are plural snake_case (``order_items``), entity names are singular
PascalCase (``OrderItem``) and field names are camelCase (``orderItem``).
"""

_VOWELS = "aeiou"


def to_singular(name: str) -> str:
    """Strip the English plural ending from a table name."""
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("sses"):
        return name[:-2]
    if name.endswith(("xes", "ches", "shes")):
        return name[:-2]
    if name.endswith(("uses", "ases", "ises", "oses")):
        return name[:-2]
    if name.endswith("s") and not name.endswith("ss"):
        return name[:-1]
    return name


def to_plural(name: str) -> str:
    """Pluralize a singular snake_case name."""
    if not name:
        return name
    if name.endswith("y") and len(name) > 1 and name[-2].lower() not in _VOWELS:
        return name[:-1] + "ies"
    if name.endswith(("s", "x", "ch", "sh")):
        return name + "es"
    return name + "s"


def _words(name: str):
    return [part for part in name.lower().replace("-", "_").split("_") if part]


def snake_to_pascal(name: str) -> str:
    """``order_items`` -> ``OrderItems``."""
    return "".join(word.capitalize() for word in _words(name))


def snake_to_camel(name: str) -> str:
    """``created_by_id`` -> ``createdById``."""
    words = _words(name)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def camel_to_snake(name: str) -> str:
    """``OrderItem`` -> ``order_item``."""
    chars = []
    for i, c in enumerate(name):
        if c.isupper():
            if i > 0:
                chars.append("_")
            chars.append(c.lower())
        else:
            chars.append(c)
    return "".join(chars)


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:] if name else name


def entity_name_for(table_name: str) -> str:
    """Derived entity name of a table: ``ORDER_ITEMS`` -> ``OrderItem``."""
    return snake_to_pascal(to_singular(table_name.lower()))
