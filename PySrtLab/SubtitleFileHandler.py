import logging
import os
import sys

from PySrtLab.EncodingSniffer import ChardetSniffer, EncodingInfo, EncodingSniffer
from PySrtLab.SubtitleRenderer import BOM

# Default encodings for reading auxiliary text files
default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'cp1252')

class SubtitleFileHandler:
    """
    Reads and writes subtitle files as raw bytes, leaving charset detection to an EncodingSniffer.

    Files are always read completely before they are parsed.
    """
    def __init__(self, sniffer : EncodingSniffer|None = None):
        self.sniffer : EncodingSniffer = sniffer or ChardetSniffer(fallback_encoding)

    def ReadFile(self, path : str) -> tuple[str, EncodingInfo]:
        """
        Read a subtitle file, detecting its encoding.

        Raises:
            OSError: If the file cannot be read
        """
        with open(path, 'rb') as f:
            data = f.read()

        return self.Decode(data, path)

    def Decode(self, data : bytes, source : str|None = None) -> tuple[str, EncodingInfo]:
        encoding = self.sniffer.Sniff(data)

        bom = "with BOM" if encoding.has_bom else "without BOM"
        logging.info(f"Encoding for `{source or 'input'}' detected as {encoding.charset}, {bom}")

        try:
            content = data.decode(encoding.charset)
        except (UnicodeDecodeError, LookupError) as e:
            logging.error(f"Unable to decode {source or 'input'} as {encoding.charset} ({e}), falling back to {fallback_encoding}")
            content = data.decode(fallback_encoding, errors='replace')
            encoding = EncodingInfo(fallback_encoding, encoding.has_bom)

        return content, encoding

    def ReadText(self, path : str) -> str:
        """
        Read a plain text file such as a list of time pairs
        """
        try:
            with open(path, 'r', encoding=default_encoding, newline='') as f:
                return f.read()
        except UnicodeDecodeError:
            with open(path, 'r', encoding=fallback_encoding, newline='') as f:
                return f.read()

    def Encode(self, content : str, charset : str, bom : bool) -> bytes:
        """
        Encode the output, falling back to UTF-8 if the text cannot be represented in the charset
        """
        if bom:
            content = BOM + content

        try:
            return content.encode(charset)
        except UnicodeEncodeError as e:
            logging.warning(f"Output cannot be encoded as {charset} ({e.reason} at position {e.start}), writing UTF-8 instead")
            return content.encode('utf-8')

    def WriteFile(self, path : str|None, data : bytes) -> None:
        """
        Write the data to the path, or to standard output if no path is given
        """
        if path:
            with open(path, 'wb') as f:
                f.write(data)
        else:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
