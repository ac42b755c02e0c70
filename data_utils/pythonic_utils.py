from pathlib import Path


def read_file_content(path) -> str:
    with open(Path(path), 'r') as f:
        return f.read()
