# prestoedit

A small modal editor for the terminal. It opens text files, and binary files
as a hex view, lays them out in split panes and tabs, and is driven by a tiny
command language that is also used for its configuration file.

## Installing

```
pip install .
```

## Running

```
prestoedit
```

The editor takes over the terminal in full-screen raw mode. `Ctrl-C` quits.
The `-c` / `--cmd` option is accepted; the editor always runs in the terminal.

On start, the directory `<user config dir>/prestoedit` is created if needed,
and `init.pe` inside it is written with a one-line comment if it does not
exist. That file is then sourced, so any commands you put in it run at
startup. After it is sourced, `:` is bound to a command prompt.

## The command prompt

Press `:` to open a prompt in the status bar. Type a command and press
`Enter` to run it, `Backspace` to delete, `Esc` to cancel.

A command that needs an argument and was given none (for example `open` on
its own, or bound to a key) opens the prompt pre-filled with the command, so
you can type the rest.

## Editing text

Text buffers start in normal mode. Press `i` to enter insert mode and `Esc`
to return to normal mode. Arrow keys move the cursor in either mode. In
insert mode, typed characters are inserted, `Enter` splits the line and
`Backspace` deletes the previous character or joins the line to the one
above. Saving writes every line followed by a newline.

The hex view shows sixteen bytes per row with offsets and a character
column; arrow keys move the cursor. It does not edit bytes.

## Commands

Most commands have a long and a short spelling.

| Command | Meaning |
| --- | --- |
| `open <path>` / `o <path>` | open a text file in the focused pane |
| `openhex <path>` / `oh <path>` | open a file as a hex view |
| `write` / `w` | save the focused buffer |
| `split h` / `split v` (`s`) | split the focused pane horizontally or vertically |
| `split <anything else>` | turn the focused pane into a tab holder |
| `quit` / `q` | close the focused buffer |
| `source <file>` / `src <file>` | run every line of a file as a command (`//` starts a comment, `~` is your home directory) |
| `bind <key> <command>` / `b` | bind a key; with no command, remove the binding |
| `highlight <name> <color>` / `hi` | set a named color: `#rrggbb`, or `%name` to link to another color |
| `highlight <name>` | remove a named color |
| `highlight` | show every named color as a swatch |
| `set <var> <value>` | set a variable on the focused buffer |
| `set <var>` | write the variable's value to the log |
| `set lsp <program>` | start a language server and announce the focused document to it |
| `auto <var> <value> <command>` / `a` | run a command whenever a variable is set to that value |
| `log` | show the editor log, newest message first |

Opening a file sets the buffer's `filetype` variable to the text after the
last dot of its name; the status bar shows it on the right.

## Key names

Bindings name keys as `<` modifiers and key `>`. Modifiers are `C-` (Ctrl),
`A-` (Alt) and `S-` (Shift), in that order. Letters are written in upper
case, so Ctrl-O is `<C-O>`. Navigation keys are `<UP>`, `<DOWN>`, `<LEFT>`,
`<RIGHT>`, `<ESC>`, `<ENTER>` and `<BS>`. The terminal reports `:` as `<S-:>`.

## Colors

The names drawn with are `fg`, `lineNumberFg`, `lineNumberSplit`, `error`,
`split`, `label`, `log_error`, `log_warn` and `log_info`. A name that is not
set, or does not end in a `#rrggbb` color, is drawn in white.

## Example configuration

```
// colors
hi fg #d0d0d0
hi lineNumberFg %fg
hi error #ff5f5f

// keys
bind <C-O> open
bind <C-W> write
bind <C-Q> quit
bind <C-L> log
```

## Using it as a library

`prestoedit.app.Editor` holds the editor state and runs commands; it is given
a `prestoedit.drawing.Drawer`, such as `prestoedit.terminal.TerminalDrawer`.
`prestoedit.script.parse_command` turns a line of the command language into a
command object, and `Editor.run_command` carries it out.

## What it does not do

- There is no graphical window; the terminal is the only display.
- The terminal reports arrow keys without modifiers and reports no mouse
  clicks, so moving focus between split panes with Ctrl and an arrow key, and
  placing the cursor with the mouse, are not available there.
- There is no command to switch between tabs, and no command opens the
  directory listing (`prestoedit.buffers.tree.TreeBuffer`).
- `write <path>` does not save to another path; only `write` on its own saves.
- `exit` is parsed but only writes a warning to the log.
- The hex view cannot change bytes.
- The language-server client sends documents (always as language `nim`) and
  requests, but does not use any reply: there is no syntax highlighting from
  the server, and its notifications are only logged.
- Background colors and filled areas are not drawn in the terminal.