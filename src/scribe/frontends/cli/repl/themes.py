"""Terminal styles for the interactive REPL.

Switch themes by passing a different theme to Console.
"""

from rich.theme import Theme


def create_theme(
    *,
    preamble: str = "dim",
    output_text: str = "white",
    error_text: str = "bold red",
    input_text: str = "bold",
    prompt: str = "bold green",
) -> Theme:
    """Create a theme with the given styles.

    Ensures every style the transcript renderer uses is defined.
    """
    return Theme(
        {
            "transcript.preamble": preamble,
            "transcript.output": output_text,
            "transcript.error": error_text,
            "transcript.input": input_text,
            "prompt": prompt,
        }
    )


THEMES: dict[str, Theme] = {
    "default": create_theme(),
    "plain": create_theme(
        preamble="none",
        output_text="none",
        error_text="none",
        input_text="none",
        prompt="none",
    ),
}


def get_theme(name: str = "default") -> Theme:
    """Get theme by name, falling back to default."""
    return THEMES.get(name, THEMES["default"])
