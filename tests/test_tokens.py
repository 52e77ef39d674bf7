import pytest

from minishell.tokens import (
    Token,
    TokenizeError,
    TokenType,
    token_type_name,
    tokenize,
    tokenize_input,
    unclosed_quotes,
)

W = TokenType.WORD
P = TokenType.PIPE
IN = TokenType.REDIRECT_IN
OUT = TokenType.REDIRECT_OUT
APP = TokenType.APPEND
HD = TokenType.HEREDOC
EOF = TokenType.EOF


def shape(tokens):
    return [(t.kind, t.value) for t in tokens]


def test_basic_command_with_quotes_and_operators():
    tokens = tokenize("ls'hello'     'world' ||<<<<>>>>")
    assert shape(tokens) == [
        (W, "ls'hello'"),
        (W, "'world'"),
        (P, None),
        (P, None),
        (HD, None),
        (HD, None),
        (APP, None),
        (APP, None),
        (EOF, None),
    ]


def test_command_with_arguments():
    assert shape(tokenize("ls -la")) == [(W, "ls"), (W, "-la"), (EOF, None)]


def test_command_with_pipe():
    assert shape(tokenize("ls | grep test")) == [
        (W, "ls"),
        (P, None),
        (W, "grep"),
        (W, "test"),
        (EOF, None),
    ]


@pytest.mark.parametrize(
    "line, kind, target",
    [
        ("ls > output.txt", OUT, "output.txt"),
        ("cat < input.txt", IN, "input.txt"),
        ("ls >> output.txt", APP, "output.txt"),
    ],
)
def test_redirections(line, kind, target):
    tokens = tokenize(line)
    assert shape(tokens) == [
        (W, line.split()[0]),
        (kind, None),
        (W, target),
        (EOF, None),
    ]


def test_redirections_and_special_characters():
    line = "echo $a&'|'\"|<><><<><><><<>><>><\"<>><<<>> ls"
    assert shape(tokenize(line)) == [
        (W, "echo"),
        (W, "$a&'|'\"|<><><<><><><<>><>><\""),
        (IN, None),
        (APP, None),
        (HD, None),
        (IN, None),
        (APP, None),
        (W, "ls"),
        (EOF, None),
    ]


def test_complex_command():
    assert shape(tokenize("ls -la | grep test > output.txt")) == [
        (W, "ls"),
        (W, "-la"),
        (P, None),
        (W, "grep"),
        (W, "test"),
        (OUT, None),
        (W, "output.txt"),
        (EOF, None),
    ]


def test_multiple_spaces():
    assert shape(tokenize("ls    -la    |    grep    test")) == shape(
        tokenize("ls -la | grep test")
    )


def test_empty_input_is_rejected():
    with pytest.raises(TokenizeError):
        tokenize("")


def test_only_spaces_gives_only_eof():
    assert shape(tokenize("   ")) == [(EOF, None)]


@pytest.mark.parametrize(
    "line, word, quoted",
    [
        ('echo "hello world"', '"hello world"', 2),
        ("echo 'hello world'", "'hello world'", 1),
        ("echo \"hello 'world'\"", "\"hello 'world'\"", 2),
    ],
)
def test_quoted_strings(line, word, quoted):
    tokens = tokenize(line)
    assert shape(tokens) == [(W, "echo"), (W, word), (EOF, None)]
    assert tokens[1].quoted == quoted
    assert tokens[0].quoted == 0


def test_unclosed_quotes_rejected():
    with pytest.raises(TokenizeError, match="unclosed quotes"):
        tokenize('echo "abc')


@pytest.mark.parametrize(
    "text, expected",
    [
        ("abc", False),
        ("'abc'", False),
        ("'abc", True),
        ('"abc', True),
        ("\"it's\"", False),
        ("'say \"hi'", False),
        ("'a' \"b", True),
    ],
)
def test_unclosed_quotes(text, expected):
    assert unclosed_quotes(text) is expected


def test_tokenize_input_keeps_open_quote_to_end():
    assert shape(tokenize_input("echo 'abc def")) == [
        (W, "echo"),
        (W, "'abc def"),
        (EOF, None),
    ]


def test_tabs_separate_words():
    assert shape(tokenize("a\tb")) == [(W, "a"), (W, "b"), (EOF, None)]


def test_operator_without_spaces():
    assert shape(tokenize("cat<in>out")) == [
        (W, "cat"),
        (IN, None),
        (W, "in"),
        (OUT, None),
        (W, "out"),
        (EOF, None),
    ]


def test_token_defaults():
    token = Token(TokenType.PIPE)
    assert (token.value, token.quoted) == (None, 0)


@pytest.mark.parametrize(
    "kind, name",
    [
        (W, "WORD"),
        (P, "PIPE"),
        (IN, "REDIRECT_IN"),
        (OUT, "REDIRECT_OUT"),
        (APP, "APPEND"),
        (HD, "HEREDOC"),
        (EOF, "EOF"),
    ],
)
def test_token_type_name(kind, name):
    assert token_type_name(kind) == name