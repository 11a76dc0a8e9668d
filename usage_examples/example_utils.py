"""
Common Utilities for Usage Examples

Provides helper functions for formatting example output.
"""

from typing import Any


def print_section(title: str, width: int = 60):
    """
    Print a formatted section header.

    Args:
        title: Section title
        width: Width of the header line
    """
    print("\n" + "=" * width)
    print(f"  {title}")
    print("=" * width)


def print_step(step_num: int, description: str):
    """
    Print a step description.

    Args:
        step_num: Step number
        description: Step description
    """
    print(f"\n[Step {step_num}] {description}")
    print("-" * 60)


def print_success(message: str):
    """Print a success message."""
    print(f"[SUCCESS] {message}")


def print_error(message: str):
    """Print an error message."""
    print(f"[ERROR] {message}")


def print_note(message: str):
    """Print an informational note."""
    print(f"[NOTE] {message}")


def print_info(key: str, value: Any):
    """Print information in key-value format."""
    print(f"  - {key}: {value}")
