"""Main handler class for registering capabilities."""

from typing import Callable, Iterable, List, Optional, Union

from .dispatcher import Dispatcher
from .registry import Capability, CapabilityKind, Registry
from .schema import ArgumentShape, Field

ArgumentsSpec = Optional[Union[ArgumentShape, Iterable[Field]]]


def _shape(func: Callable, arguments: ArgumentsSpec) -> ArgumentShape:
    if arguments is None:
        return ArgumentShape.from_function(func)
    if isinstance(arguments, ArgumentShape):
        return arguments
    return ArgumentShape(arguments)


def _description(func: Callable, description: Optional[str]) -> str:
    return description or (func.__doc__ or "").strip()


class LearningHandler:
    """Registers tools, resources and prompts for one server.

    Capabilities are registered with decorators at startup; ``dispatcher()``
    freezes the registry and hands back the request dispatcher.
    """

    def __init__(self, name: str = "mcp-learning-server", version: str = "1.0.0"):
        """Initialize a handler.

        Args:
            name: Server name, reported in the startup banner
            version: Server version
        """
        self.name = name
        self.version = version
        self.registry = Registry()

    @property
    def tool(self):
        """Decorator for registering tools.

        Usage:
            @handler.tool
            def echo(text: str) -> str:
                return text

        Or with options:
            @handler.tool(
                name="calculate",
                description="Perform basic arithmetic calculations",
                arguments=[EnumField("operation", choices=OPERATIONS), ...],
            )
            def calculate(operation, a, b):
                ...
        """
        return self._decorator(CapabilityKind.TOOL)

    @property
    def resource(self):
        """Decorator for registering resources.

        Usage:
            @handler.resource(uri="project://info", mime_type="application/json")
            def project_info() -> dict:
                return {"version": "1.0.0"}
        """
        def decorator(**options):
            if "uri" not in options:
                raise ValueError("Resource decorator requires 'uri' parameter")

            def inner(func: Callable) -> Callable:
                self.registry.register(Capability(
                    kind=CapabilityKind.RESOURCE,
                    identifier=options["uri"],
                    description=_description(func, options.get("description")),
                    arguments=ArgumentShape(),
                    handler=func,
                    title=options.get("name") or func.__name__,
                    mime_type=options.get("mime_type", "text/plain"),
                ))
                return func
            return inner

        return decorator

    @property
    def prompt(self):
        """Decorator for registering prompts.

        Usage:
            @handler.prompt(name="code-review", arguments=[...])
            def code_review(language, code):
                return [{"role": "user", "content": f"Review this {language}..."}]
        """
        return self._decorator(CapabilityKind.PROMPT)

    def _decorator(self, kind: CapabilityKind):
        def register(func: Callable, name=None, description=None, arguments=None) -> Callable:
            self.registry.register(Capability(
                kind=kind,
                identifier=name or func.__name__,
                description=_description(func, description),
                arguments=_shape(func, arguments),
                handler=func,
            ))
            return func

        def decorator(func_or_options=None, **kwargs):
            if func_or_options is None:
                # Called with keyword arguments: @handler.tool(name="...")
                def inner_decorator(func: Callable) -> Callable:
                    return register(func, **kwargs)
                return inner_decorator
            elif callable(func_or_options):
                # Direct decoration: @handler.tool
                return register(func_or_options, **kwargs)
            else:
                raise TypeError(f"Invalid arguments to {kind.value} decorator")

        return decorator

    def dispatcher(self, timeout: Optional[float] = None) -> Dispatcher:
        """Freeze the registry and build the request dispatcher.

        Args:
            timeout: Per-request handler budget in seconds

        Returns:
            Dispatcher over this handler's registry
        """
        return Dispatcher(self.registry.freeze(), timeout=timeout)

    def banner(self) -> List[str]:
        """Startup banner lines, naming every registered capability."""
        def names(kind: CapabilityKind) -> str:
            return ", ".join(self.registry.identifiers(kind)) or "(none)"

        return [
            f"{self.name} v{self.version} running on stdio",
            "Available capabilities:",
            f"- Tools: {names(CapabilityKind.TOOL)}",
            f"- Resources: {names(CapabilityKind.RESOURCE)}",
            f"- Prompts: {names(CapabilityKind.PROMPT)}",
        ]

    def __repr__(self) -> str:
        """String representation of the handler."""
        return (
            f"LearningHandler(name='{self.name}', "
            f"tools={len(self.registry.list(CapabilityKind.TOOL))}, "
            f"resources={len(self.registry.list(CapabilityKind.RESOURCE))}, "
            f"prompts={len(self.registry.list(CapabilityKind.PROMPT))})"
        )

# Short alias
Handler = LearningHandler
