from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import os

import chardet

fallback_encoding = os.getenv('FALLBACK_ENCODING', 'cp1252')

# Byte order marks, longest first
byte_order_marks : list[tuple[bytes, str]] = [
    (b'\xef\xbb\xbf', 'UTF-8'),
    (b'\xfe\xff', 'UTF-16BE'),
    (b'\xff\xfe', 'UTF-16LE'),
]

@dataclass
class EncodingInfo:
    charset : str
    has_bom : bool = False

    @property
    def is_unicode(self) -> bool:
        return self.charset.upper().startswith('UTF-')

class EncodingSniffer(ABC):
    """
    Interface for detecting the character set of raw subtitle data
    """
    @abstractmethod
    def Sniff(self, data : bytes) -> EncodingInfo:
        """
        Detect the charset of the data and whether it starts with a byte order mark.

        Implementations should always return a usable charset, logging an error if it is only a guess.
        """
        raise NotImplementedError

class ChardetSniffer(EncodingSniffer):
    """
    Detects a byte order mark directly, otherwise asks chardet, then tries strict UTF-8
    before falling back to an 8-bit charset.
    """
    def __init__(self, fallback : str|None = None):
        self.fallback = fallback or fallback_encoding

    def Sniff(self, data : bytes) -> EncodingInfo:
        for bom, charset in byte_order_marks:
            if data.startswith(bom):
                return EncodingInfo(charset, has_bom=True)

        detected = chardet.detect(data)
        charset = detected.get('encoding')
        if charset:
            logging.debug(f"chardet detected {charset} with confidence {detected.get('confidence')}")
            return EncodingInfo(charset)

        try:
            data.decode('utf-8')
            return EncodingInfo('UTF-8')
        except UnicodeDecodeError:
            pass

        logging.error(f"Encoding detection failed. Assuming {self.fallback}, which is probably wrong. "
                      "You should try again after converting the input file to a known encoding like UTF-8.")
        return EncodingInfo(self.fallback)
