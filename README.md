# minishell

A small interactive command shell. It reads a line, splits it into words and
operators, expands `$NAME` variables, and runs the commands, connecting them
with pipes and applying any file redirections.

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is `minishell> `. Press Ctrl-D to leave, or type `exit`. Ctrl-C
gives a fresh prompt and Ctrl-\ is ignored. Blank lines are ignored. If you
start the command with any arguments, it returns at once without reading
anything.

## What a line may contain

- Words, separated by spaces or tabs. Text in single quotes is taken as it
  is; text in double quotes still has `$NAME` expanded. Quotes that are never
  closed make the line an error.
- `|` to send one command's output into the next.
- `< file` to read input from a file, `> file` to write output to a file
  (truncating it), and `>> file` to append to it. A word directly after a
  redirection is not expanded.
- `$NAME` is replaced with the value of the variable, or with nothing if it is
  not set.

A redirection with no word after it, or a `|` not followed by a word or a
redirection, is reported as an error and the line is not run.

## Builtins

| Command  | What it does |
|----------|--------------|
| `echo`   | Prints its arguments separated by spaces. `-n` as the first argument leaves off the newline; `echo $?` prints the last exit status. |
| `cd`     | Changes directory, to `$HOME` when no directory is given; `cd ..` also updates `PWD`. |
| `env`    | Prints every variable that has a value as `NAME=value`. Takes no arguments. |
| `export` | With no arguments, prints the variables sorted by name as `declare -x`. Otherwise sets each `NAME=value`, or declares `NAME` without a value. Invalid names are reported. |
| `exit`   | Leaves the shell when it is the first command of a line. |

Any other command is looked up on `PATH` (or run directly when it contains a
`/`). A command that cannot be found prints `minishell: NAME: command not
found` and sets the exit status to 127; one that cannot be run for another
reason sets it to 126.

## Using it from Python

```python
from minishell.environment import Environment
from minishell.parsing import parse
from minishell.shell import Shell

env = Environment.from_strings(["HOME=/home/user", "PATH=/usr/bin:/bin"])
commands = parse("echo $HOME | cat > out.txt", env)
for command in commands:
    print(command.args, command.redirections)

shell = Shell(env)
status = shell.run_line("echo hello")
```

`minishell.tokens.tokenize` and `minishell.expansion.expand_word` are there as
well, for when only the tokenizer or the expansion step is needed, and
`minishell.executor.execute_pipeline` runs a list of parsed commands directly.

## What it does not do

- Every command runs as if in a separate process, builtins included. So `cd`
  and `export` take effect only for that one command: the working directory
  and the variables of the session are the same afterwards as before.
- `<<` is recognised and parsed, but no heredoc is read; it has no effect
  when the command runs.
- There is no `unset` command, and `$?` is understood only by `echo`.
- A line whose exit status comes out as 2 ends the session, as `exit` does.
- There are no `;`, `&&`, `||`, background jobs, globbing or scripts: only
  single lines typed at the prompt.