import io

import pytest

from newsboard.client_commanddecoder import CommandDecoder, InputAborted, InputStatus
from newsboard.messagehandler import MessageError, Status


class FakeHandler:
    def __init__(self, reply=None, error=None):
        self.calls = []
        self.reply = ["line one", "line two"] if reply is None else reply
        self.error = error

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.reply

    def list_groups(self):
        return self._record("list_groups")

    def create_group(self, title):
        return self._record("create_group", title)

    def delete_group(self, group_id):
        return self._record("delete_group", group_id)

    def list_articles(self, group_id):
        return self._record("list_articles", group_id)

    def create_article(self, group_id, title, author, text):
        return self._record("create_article", group_id, title, author, text)

    def delete_article(self, group_id, article_id):
        return self._record("delete_article", group_id, article_id)

    def get_article(self, group_id, article_id):
        return self._record("get_article", group_id, article_id)

    def change_database(self, index):
        return self._record("change_database", index)


def make(reply=None, error=None):
    handler = FakeHandler(reply, error)
    out = io.StringIO()
    return handler, CommandDecoder(handler, out), out


def test_command_is_case_and_space_insensitive():
    handler, decoder, out = make()
    assert decoder.decode(io.StringIO(" List_ NG \n")) is True
    assert handler.calls == [("list_groups", ())]
    text = out.getvalue()
    assert "Reply from server: " in text
    assert "line one\nline two\n" in text


def test_create_article_reads_all_fields():
    handler, decoder, _ = make()
    stream = io.StringIO("create_art\n1\nTitle\nAuthor\nBody text\n")
    assert decoder.decode(stream) is True
    assert handler.calls == [("create_article", (1, "Title", "Author", "Body text"))]


def test_get_and_delete_article_read_two_ids():
    handler, decoder, _ = make()
    decoder.decode(io.StringIO("get_art\n2\n5\n"))
    decoder.decode(io.StringIO("delete_art\n3\n4\n"))
    assert handler.calls == [("get_article", (2, 5)), ("delete_article", (3, 4))]


def test_exit_during_input_skips_request():
    handler, decoder, out = make()
    assert decoder.decode(io.StringIO("create_ng\nexit\n")) is True
    assert handler.calls == []
    assert InputStatus.EXIT.value in out.getvalue()


def test_id_is_asked_again_until_valid():
    handler, decoder, out = make()
    decoder.decode(io.StringIO("delete_ng\nabc\n0\n3\n"))
    assert handler.calls == [("delete_group", (3,))]
    text = out.getvalue()
    assert "Id needs to be a number" in text
    assert "Please input Id bigger than 0" in text


def test_empty_line_is_asked_again():
    handler, decoder, out = make()
    decoder.decode(io.StringIO("create_ng\n\ncomp.lang\n"))
    assert handler.calls == [("create_group", ("comp.lang",))]
    assert "Error Empty Input, Type again" in out.getvalue()


def test_unknown_command():
    handler, decoder, out = make()
    assert decoder.decode(io.StringIO("bogus\n")) is True
    assert handler.calls == []
    assert "FAIL! no such command exists" in out.getvalue()


def test_message_error_is_reported():
    _, decoder, out = make(error=MessageError(Status.PROTOCOL_VIOLATION))
    assert decoder.decode(io.StringIO("list_ng\n")) is True
    assert "Error protocol violation" in out.getvalue()
    assert "Reply from server: " not in out.getvalue()


def test_exit_and_end_of_input_end_session():
    _, decoder, out = make()
    assert decoder.decode(io.StringIO("exit\n")) is False
    assert decoder.decode(io.StringIO("")) is False
    assert "STREAM FAIL" in out.getvalue()


def test_read_input_id_rejects_out_of_range():
    _, decoder, out = make()
    assert decoder.read_input_id(io.StringIO("2147483648\n7\n")) == 7
    assert "Id needs to be a number" in out.getvalue()


def test_read_input_id_accepts_leading_digits():
    _, decoder, _ = make()
    assert decoder.read_input_id(io.StringIO("12abc\n")) == 12


def test_read_input_string_raises_at_end_of_input():
    _, decoder, _ = make()
    with pytest.raises(InputAborted) as info:
        decoder.read_input_string(io.StringIO(""))
    assert info.value.status is InputStatus.EXIT


def test_read_input_string_keeps_inner_spaces():
    _, decoder, _ = make()
    assert decoder.read_input_string(io.StringIO("a b  c\n")) == "a b  c"


def test_help_lists_commands():
    _, decoder, out = make()
    assert decoder.decode(io.StringIO("HELP_COM\n")) is True
    text = out.getvalue()
    assert "List newsgroups: LIST_NG" in text
    assert "change database: CHANGE_DATABASE" in text


def test_print_reply_layout():
    _, decoder, out = make()
    decoder.print_reply(["alpha", "beta"])
    assert out.getvalue() == "Reply from server: \nalpha\nbeta\n\n"