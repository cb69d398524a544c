"""XML namespaces used by MAML help documents."""

ROOT_NAMESPACE = "http://msh"
MAML_NAMESPACE = "http://schemas.microsoft.com/maml/2004/10"
DEV_NAMESPACE = "http://schemas.microsoft.com/maml/dev/2004/10"
COMMAND_NAMESPACE = "http://schemas.microsoft.com/maml/dev/command/2004/10"

# Declaration order on the root element.
STANDARD_PREFIXES: dict[str, str] = {
    "maml": MAML_NAMESPACE,
    "dev": DEV_NAMESPACE,
    "command": COMMAND_NAMESPACE,
}
