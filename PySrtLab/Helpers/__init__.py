import os


def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.

    Args:
        filepath: Input file path

    Returns:
        str: Normalized path
        None: If filepath is None
    """
    if not filepath:
        return None
    return os.path.normpath(filepath)

def GetLineEnding(crlf : bool) -> str:
    """
    Line ending used when rendering output
    """
    return "\r\n" if crlf else "\n"
