import pytest

from glisp.errors import GlispSyntaxError
from glisp.reader.parser import Reader, read_string
from glisp.reader.reader_macros import ReadTable, default_read_table, read_list
from glisp.types.pair import to_list
from glisp.types.ports import InputPort
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector


@pytest.fixture
def table():
    return default_read_table()


def test_entries_match_in_order(table):
    table.define("symbol", lambda tok, reader: tok.value.upper(), prepend=True)
    assert read_string("abc", table) == "ABC"
    assert to_list(read_string("(a b)", table)) == ["A", "B"]


def test_value_specific_entries(table):
    table.define("symbol", lambda tok, reader: Symbol("nil-sym"), value="nil", prepend=True)
    assert read_string("nil", table) is Symbol("nil-sym")
    assert read_string("other", table) is Symbol("other")


def test_new_hash_syntax_reads_following_datum(table):
    # #box(1 2) -> #(1 2): a hash token followed by a list
    def read_box(tok, reader):
        return Vector(to_list(reader.read_datum(tok)))

    table.define("hash", read_box, value="#box")
    result = read_string("#box(1 2)", table)
    assert isinstance(result, Vector)
    assert result.items == [1, 2]


def test_copy_does_not_leak(table):
    derived = table.copy()
    derived.define("hash", lambda tok, reader: 0, value="#zero")
    assert read_string("#zero", derived) == 0
    with pytest.raises(GlispSyntaxError):
        read_string("#zero", table)


def test_tables_are_fresh_per_call():
    first = default_read_table()
    first.define("hash", lambda tok, reader: 1, value="#one")
    with pytest.raises(GlispSyntaxError):
        read_string("#one", default_read_table())


def test_empty_table_rejects_everything():
    with pytest.raises(GlispSyntaxError) as exc:
        read_string("1", ReadTable())
    assert "failed to parse" in exc.value.message


def test_custom_table_applies_inside_lists(table):
    table.define("int", lambda tok, reader: int(tok.value) * 10, prepend=True)
    reader = Reader(InputPort.from_string("(1 (2))"), table)
    assert to_list(reader.read())[0] == 10


def test_brackets_share_the_list_handler(table):
    entries = [e for e in table.entries if e.handler is read_list]
    assert {e.token_type for e in entries} == {"lparen", "lbracket"}
