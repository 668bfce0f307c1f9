"""
Text clean-up passes applied to the text of each cue.

Every pass is a pure function from text to text. Cue text uses a newline after every line,
and the patterns rely on that: a trailing "NAME:" line is recognised by the newline following it.
"""
from collections.abc import Callable
from dataclasses import dataclass

import regex

from PySrtLab.Options import Options

TextTransform = Callable[[str], str]

@dataclass
class TextPass:
    name : str
    transform : TextTransform

    def __call__(self, text : str) -> str:
        return self.transform(text)

_leading_whitespace = regex.compile(r"^[ \t]+", regex.MULTILINE)
_trailing_whitespace = regex.compile(r"[ \t]+$", regex.MULTILINE)

def StripWhitespace(text : str) -> str:
    """Strip spaces and tabs from the beginning and end of every line"""
    text = _leading_whitespace.sub('', text)
    return _trailing_whitespace.sub('', text)

# OCR programs confuse 'l' and 'I' because they look identical in sans-serif fonts.
_ocr_fixes : list[tuple[regex.Pattern, str]] = [
    # "I ", "I'", "If", "In", "Is", "It" and words starting with them (no English word starts with "ln", "ls"...).
    # A hyphen only counts as a word start after whitespace or at line start, so "nice-looking" is left alone.
    (regex.compile(r"(^-?|\s-?|[.…\"“])l([ '’.,fnst]|$)", regex.MULTILINE), r"\1I\2"),
    # No English word starts with a letter followed by "fj", so the OCR must have dropped a space
    (regex.compile(r"(^|\s|[-.…\"“])(\w)fj", regex.MULTILINE), r"\1\2f j"),
    # 'l' at the start of an all-caps word
    (regex.compile(r"(^|\s|\[|\(|-)l([A-Z])", regex.MULTILINE), r"\1I\2"),
    # 'l' after two or more capitals
    (regex.compile(r"([A-Z]{2,})l", regex.MULTILINE), r"\1I"),
    # 'l' between two capitals
    (regex.compile(r"([A-Z])l([A-Z])", regex.MULTILINE), r"\1I\2"),
]

# Spurious space after a 1 in a number. Applied twice, since the following digit may be another 1.
_ocr_spaced_one = regex.compile(r"1 (\d+|[.,:])", regex.MULTILINE)

def FixOcrErrors(text : str) -> str:
    """
    Fix common OCR errors in English text, mostly 'l' read in place of 'I'
    """
    for pattern, replacement in _ocr_fixes:
        text = pattern.sub(replacement, text)

    text = _ocr_spaced_one.sub(r"1\1", text)
    text = _ocr_spaced_one.sub(r"1\1", text)
    return text

_hi_parentheses = regex.compile(r"\([A-Z0-9 ,.\-'\"&\n]+?\)")
_hi_brackets = regex.compile(r"\[[A-Z0-9 ,.\-'\"&\n]+?\]")
_speaker_prefix = regex.compile(r"^[A-Z0-9 '\"#]+?: ", regex.MULTILINE)
_speaker_remnant = regex.compile(r"[A-Z0-9 '\"#]+?:[ \n]")

_hi_parentheses_any_case = regex.compile(r"-? ?\([A-Z0-9 ,.!\-'\"&/\n]+?\)", regex.IGNORECASE)
_hi_brackets_any_case = regex.compile(r"-? ?\[[A-Z0-9 ,.!\-'\"&/\n]+?\]", regex.IGNORECASE)
_speaker_prefix_any_case = regex.compile(r"^[A-Z0-9 '\"#]+?: ", regex.MULTILINE | regex.IGNORECASE)
_speaker_dashed_any_case = regex.compile(r"^-[A-Z0-9 '\"#]+?: ", regex.MULTILINE | regex.IGNORECASE)
# Kept case-sensitive: "one purpose, and one purpose only:" is dialogue, not a speaker
_speaker_line = regex.compile(r"[A-Z0-9 '\"#]+?: *$", regex.MULTILINE)

_leading_blank_lines = regex.compile(r"^\n+([^\n])")

def RemoveHearingImpaired(text : str, level : int = 1) -> str:
    """
    Remove annotations for the hearing impaired, e.g. "(CLEARS THROAT)" or "JANUS: ".

    Level 1 only removes capitalised annotations. Level 2 also removes annotations in any case,
    along with a dash before them, and "Name: " speaker labels, at a higher risk of damaging dialogue.
    """
    text = _hi_parentheses.sub('', text)
    text = _hi_brackets.sub('', text)

    if level >= 2:
        text = _hi_parentheses_any_case.sub('', text)
        text = _hi_brackets_any_case.sub('', text)
        # "Name: Text" on its own line becomes a dialogue dash
        text = _speaker_prefix_any_case.sub('- ', text)
        text = _speaker_line.sub('', text)
        text = _speaker_dashed_any_case.sub('- ', text)
        text = _speaker_prefix_any_case.sub('', text)
    else:
        text = _speaker_prefix.sub('- ', text)
        text = _speaker_remnant.sub('', text)

    return _leading_blank_lines.sub(r"\1", text)

_url_char = r"[\w~;:$\-+!*?/=&@#%]"
_url_pattern = regex.compile(
    r"(?:[^\w\"=\[\]]|\A)\\*(\w+://[\w~.;:,$\-+!*?/=&@#%]+\." + _url_char + r"+" + _url_char + r")",
    regex.IGNORECASE)
_www_pattern = regex.compile(
    r"(?:[\s>(]|\A)(www\.[^.][\w~.;:,$\-+!*?/=&@#%]+\." + _url_char + r"+" + _url_char + r")",
    regex.IGNORECASE)

def ContainsUrl(text : str) -> bool:
    return bool(_url_pattern.search(text) or _www_pattern.search(text))

def RemoveUrls(text : str) -> str:
    """
    Blank the whole text if it contains a URL, since a subtitle with a link is assumed not to be dialogue
    """
    return '' if ContainsUrl(text) else text

def BuildTextPipeline(options : Options) -> list[TextPass]:
    """
    The enabled clean-up passes, in the order they must be applied
    """
    passes : list[TextPass] = []
    strip_whitespace = options.get_bool('strip_whitespace')

    if strip_whitespace:
        passes.append(TextPass('whitespace', StripWhitespace))

    if options.get_bool('fix_ocr'):
        passes.append(TextPass('ocr', FixOcrErrors))

    level = options.hearing_impaired_level
    if level > 0:
        passes.append(TextPass('hearing_impaired', lambda text: RemoveHearingImpaired(text, level)))

    if options.get_bool('strip_urls'):
        passes.append(TextPass('urls', RemoveUrls))

    # Once more, to clean up whatever the other passes left behind
    if strip_whitespace:
        passes.append(TextPass('whitespace', StripWhitespace))

    return passes
