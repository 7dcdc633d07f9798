import re


def sanitise_local_name(name):
    """Sanitise a column name or value so it can be used as an IRI local name
    by replacing non-alphanumeric characters."""
    # Replace whitespace and any other non-alphanumeric, non-hyphen
    # character with an underscore
    sanitised_name = re.sub(r"[^\w-]", "_", name.strip())
    return sanitised_name


def strip_header_prefix(line, prefix="#"):
    """Remove every leading header marker and the whitespace that follows it."""
    return line.lstrip(prefix).strip()
