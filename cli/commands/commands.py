from dataclasses import dataclass, field

# sub-command name -> Command, filled at class definition time
registry = {}


@dataclass
class Command:
    name: str
    help: str
    arguments: list = field(default_factory=list)


def argument(*args, **kwargs):
    """Add an argparse argument to the command, stacked arguments keep their top-down order"""

    def decorator(func):
        func.__dict__.setdefault('cli_arguments', []).insert(0, (args, kwargs))
        return func

    return decorator


def command(name: str = None, help: str = None):
    """
    Register a `cmd_<name>` CLI method as a sub-command, must be the outermost decorator.
    Help defaults to the first line of the docstring.
    """

    def decorator(func):
        if not func.__name__.startswith('cmd_'):
            raise ValueError(f'command methods must start with cmd_ ({func.__name__})')
        cmd_name = name or func.__name__[4:]
        if cmd_name in registry:
            raise ValueError(f'{func.__name__} registered more than once')
        registry[cmd_name] = Command(
            cmd_name,
            help or func.__doc__.strip().splitlines()[0].strip(),
            func.__dict__.get('cli_arguments', []),
        )
        return func

    return decorator
