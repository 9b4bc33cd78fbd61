import pytest


class ScriptedIO:
    """Console stand-in fed from lists; records everything written."""

    def __init__(self, commands=(), names=()):
        self.commands = list(commands)
        self.names = list(names)
        self.output: list[str] = []
        self.clears = 0

    def write(self, text: str):
        self.output.append(text)

    def read_command(self):
        return self.commands.pop(0) if self.commands else None

    def read_suspect_name(self):
        return self.names.pop(0) if self.names else None

    def clear_screen(self):
        self.clears += 1

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def scripted_io():
    return ScriptedIO
