# newsboard

A small news system: a server that keeps newsgroups and their articles, and an
interactive client that talks to it over TCP using a compact binary protocol.

The server holds two stores side by side, one in memory and one on disk, and
answers from whichever is active. Clients can switch the active store while the
server runs; the switch applies to every client, and no data is copied between
the stores.

## Installing

```
pip install .
```

No libraries beyond the Python standard library are needed.

## Running the server

```
newsboard-server 7777
```

The first argument is the port. Any further arguments turn on log output for
the named areas. Messages are logged under `NETWORK` (every code, number and
string sent or received) and `DATABASE` (groups or articles not found, file
problems):

```
newsboard-server 7777 NETWORK DATABASE
```

At start-up the server asks on the console which store to use first:

```
Enter which database you want to connect to :
[1] Memory storage
[2] Disk storage
```

It then serves clients until interrupted with Ctrl+C. A client that breaks the
protocol or goes away is dropped.

### Disk storage

The disk store lives in a directory called `Newsgroup` under the current
directory, created at start-up if it is missing (it is created even when the
memory store is chosen). Each newsgroup is a subdirectory named `<name>_<id>`
and each article is a file `<title>_<id>.json` holding its id, title, author
and body. The next free ids are kept in `groupId_number.txt` and in
`articleID_number.txt` inside each group, so numbering carries on across
restarts. The memory store is lost when the server stops.

Group ids are never reused. In the memory store article ids are counted across
all groups; on disk each group counts its own articles from 1.

## Running the client

```
newsboard-client localhost 7777
```

It exits with code 1 on wrong usage, 2 on a bad port number and 3 when the
connection cannot be made.

Type `help_com` to see the commands. Commands ignore case and spaces:

| Command           | What it does                                   |
|-------------------|------------------------------------------------|
| `LIST_NG`         | list newsgroups as `<id> <name>`               |
| `CREATE_NG`       | create a newsgroup                             |
| `DELETE_NG`       | delete a newsgroup and its articles            |
| `LIST_ART`        | list the articles of a newsgroup               |
| `CREATE_ART`      | create an article (title, author, text)        |
| `DELETE_ART`      | delete an article                              |
| `GET_ART`         | show an article's title, author and text       |
| `CHANGE_DATABASE` | switch the server to store 1 (memory) or 2 (disk) |
| `exit`            | leave the client                               |

Each command asks for its arguments one line at a time. An empty line is asked
for again, as is a number that is not a whole number of at least 1. Typing
`exit` at any prompt abandons the command. Article text is a single line.

## Using it as a library

```python
from newsboard.interface import Interface

store = Interface(active_db=1, disk_root="data")   # 1 = memory, 2 = disk
store.make_group("comp.misc")                      # True
store.list_groups()                                # [ListObject(name='comp.misc', id=1)]
store.make_article(1, "Hello", "Ann", "First post")
store.get_article(1, 1)                            # Article(title='Hello', author='Ann', body='First post', id=1)
store.switch_database(2)                           # True; now the disk store
```

The main pieces:

- `newsboard.database.MemoryDatabase` and `newsboard.disk_database.DiskDatabase`
  store groups and `newsboard.article.Article` objects. Lookups of missing
  groups or articles raise `newsboard.database.DatabaseError`, whose `status`
  is a `RemoveStatus`.
- `newsboard.interface.Interface` holds both stores and forwards to the active
  one; `Interface.prompt()` asks which to start with.
- `newsboard.client_commandhandler.ClientCommandHandler` sends commands over a
  `newsboard.connection.Connection` and returns the reply as a list of lines.
  Failed exchanges raise `newsboard.messagehandler.MessageError`, whose
  `status` is a `Status`.
- `newsboard.databaseserver.DatabaseServer` is the server itself, and
  `newsboard.protocol.Protocol` lists every code used on the wire.

## What it does not do

There is no authentication and no encryption; anyone who can reach the port
can change the data. The server handles one command at a time in a single
thread, and the client has no way to stop the server.

## Running the tests

```
pip install .[test]
pytest
```