# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for cliflag output."""
from rich.console import Console

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)
