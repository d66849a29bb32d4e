from glisp.reader.parser import Lexer, Reader, Token, lex, read, read_all, read_string
from glisp.reader.reader_macros import ReadTable, default_read_table

__all__ = [
    "Lexer",
    "Reader",
    "Token",
    "ReadTable",
    "default_read_table",
    "lex",
    "read",
    "read_all",
    "read_string",
]
