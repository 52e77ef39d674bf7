import pytest

from minishell.environment import Environment
from minishell.parsing import Command, ParseError, Redirection, is_redirection, parse
from minishell.tokens import TokenType


@pytest.fixture
def env():
    return Environment([("HOME", "/home/user"), ("PATH", "/bin:/usr/bin")])


def test_is_redirection():
    assert is_redirection(TokenType.REDIRECT_IN)
    assert is_redirection(TokenType.REDIRECT_OUT)
    assert is_redirection(TokenType.APPEND)
    assert is_redirection(TokenType.HEREDOC)
    assert not is_redirection(TokenType.WORD)
    assert not is_redirection(TokenType.PIPE)
    assert not is_redirection(TokenType.EOF)


def test_basic_command_with_double_pipe_fails(env):
    with pytest.raises(ParseError):
        parse("ls'hello'     'world' ||<<<<>>>>", env)


def test_command_with_arguments(env):
    assert parse("ls -la", env) == [Command(["ls", "-la"])]


def test_command_with_pipe(env):
    assert parse("ls | grep test", env) == [Command(["ls"]), Command(["grep", "test"])]


def test_output_redirection(env):
    assert parse("ls > output.txt", env) == [
        Command(["ls"], [Redirection(TokenType.REDIRECT_OUT, "output.txt")])
    ]


def test_input_redirection(env):
    assert parse("cat < input.txt", env) == [
        Command(["cat"], [Redirection(TokenType.REDIRECT_IN, "input.txt")])
    ]


def test_append_redirection(env):
    assert parse("echo 'Hello' >> output.txt", env) == [
        Command(["echo", "Hello"], [Redirection(TokenType.APPEND, "output.txt")])
    ]


def test_heredoc(env):
    assert parse("cat << EOF Hello World EOF", env) == [
        Command(["cat", "Hello", "World", "EOF"], [Redirection(TokenType.HEREDOC, "EOF")])
    ]


def test_heredoc_without_closing_word(env):
    assert parse("cat << EOF Hello World", env) == [
        Command(["cat", "Hello", "World"], [Redirection(TokenType.HEREDOC, "EOF")])
    ]


def test_pipe_and_redirection(env):
    assert parse("ls -la | grep test > output.txt", env) == [
        Command(["ls", "-la"]),
        Command(["grep", "test"], [Redirection(TokenType.REDIRECT_OUT, "output.txt")]),
    ]


def test_multiple_spaces(env):
    assert parse("ls    -la    |    grep    test", env) == [
        Command(["ls", "-la"]),
        Command(["grep", "test"]),
    ]


def test_empty_input(env):
    with pytest.raises(ParseError):
        parse("", env)


def test_quoted_pipe_is_a_word(env):
    assert parse('echo "|" Hello World', env) == [Command(["echo", "|", "Hello", "World"])]


def test_unclosed_quote(env):
    with pytest.raises(ParseError, match="unclosed quotes"):
        parse("echo 'abc", env)


def test_pipe_followed_by_pipe(env):
    with pytest.raises(ParseError, match="Pipe not followed"):
        parse("ls | | grep test", env)


def test_redirection_followed_by_redirection(env):
    with pytest.raises(ParseError, match="Redirection without target"):
        parse("ls > > output.txt", env)


def test_redirection_at_end(env):
    with pytest.raises(ParseError):
        parse("ls >", env)


def test_trailing_pipe(env):
    with pytest.raises(ParseError):
        parse("ls |", env)


def test_pipe_followed_by_redirection(env):
    assert parse("ls | > out", env) == [
        Command(["ls"]),
        Command([], [Redirection(TokenType.REDIRECT_OUT, "out")]),
    ]


def test_leading_pipe_gives_empty_first_command(env):
    assert parse("| ls", env) == [Command(), Command(["ls"])]


def test_special_characters(env):
    assert parse("echo $HOME | grep 'test'", env) == [
        Command(["echo", "/home/user"]),
        Command(["grep", "test"]),
    ]


def test_environment_variable(env):
    assert parse("echo $PATH", env) == [Command(["echo", "/bin:/usr/bin"])]


def test_redirect_target_not_expanded_but_unquoted(env):
    assert parse("ls > $HOME", env) == [
        Command(["ls"], [Redirection(TokenType.REDIRECT_OUT, "$HOME")])
    ]
    assert parse("ls > 'out file'", env) == [
        Command(["ls"], [Redirection(TokenType.REDIRECT_OUT, "out file")])
    ]


def test_blank_line_gives_one_empty_command(env):
    assert parse("   ", env) == [Command()]