# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for argsmith output."""
from rich.console import Console

console = Console(highlight=False, soft_wrap=True)
