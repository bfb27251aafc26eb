from .parsing_report import ParsingReport, build_parsing_report, section_presence

__all__ = [
    "ParsingReport",
    "build_parsing_report",
    "section_presence",
]
