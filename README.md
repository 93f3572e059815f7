# archlab

Small programs from a computer architecture course: cache simulators that
replay memory traces, number-representation tools (base conversion, 8-bit
binary subtraction, IEEE 754 encoding and decoding, a Monte Carlo estimate of
pi), graph utilities over adjacency matrices, and a few data-structure drills.

Each area is a module in the `archlab` package and also has a command.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

Every command reads its input from a file named on the command line and
prints its result to standard output. A file that cannot be opened, or
malformed input, makes the command exit with status 1.

| Command             | Module              | Usage |
|---------------------|---------------------|-------|
| `archlab-cache`     | `archlab.cache`     | `archlab-cache {direct,fully,set} TRACE` |
| `archlab-numrep`    | `archlab.numrep`    | `archlab-numrep {convert,subtract,bin-to-float,double-to-bin,float-mul,pi} INPUT` |
| `archlab-graphs`    | `archlab.graphs`    | `archlab-graphs {edges,cycle,tree,mst} MATRIX` |
| `archlab-exercises` | `archlab.exercises` | `archlab-exercises {balanced,edit-distance,stack} INPUT` |

### Cache simulation

`archlab-cache` replays a memory trace and prints
`hits:H misses:M evictions:E`. Traces use the Cache Lab layout, one access
per line: a space, an access type, a hexadecimal address and a size.

```
 L 10,4
 S 18,4
 M 20,4
```

`L` and `S` access the cache once; `M` (modify) accesses it twice. Lines whose
second character is not `L`, `S` or `M` are ignored. All caches use 16-byte
blocks:

- `direct` — `DirectMappedCache`, 16 sets of one line;
- `fully` — `FullyAssociativeCache`, 16 lines with FIFO replacement;
- `set` — `SetAssociativeCache`, 4 sets of 4 lines with LRU replacement,
  where recency advances once per trace line.

### Number representations

The input file for each `archlab-numrep` subcommand holds:

- `convert` — the digit count, the source base, the destination base and the
  number (digits above 9 are `A`–`Z`); prints the number in the new base.
- `subtract` — two 8-bit binary numbers on separate lines; prints their
  difference as 8 bits, wrapping modulo 256.
- `bin-to-float` — 32 bits of a single-precision number; prints its value,
  always reading the exponent as normalised.
- `double-to-bin` — a decimal number; prints its double-precision bits as
  `sign_exponent_fraction`.
- `float-mul` — two lines of 32 single-precision bits; prints the 32 bits of
  their product.
- `pi` — a precision; samples random points until the estimate of pi is
  within that precision and prints it with twelve decimal places.

### Graphs

Adjacency matrix files start with the node count `n` followed by the `n` rows
of the matrix.

- `edges` — entries are `0`/`1`; prints each undirected edge `row column`
  once, from the upper triangle.
- `cycle` — prints the nodes of the first cycle a depth-first search finds in
  the directed graph, or `DAG` when there is none.
- `tree` — prints `yes` when the graph has fewer edges than nodes, `no`
  otherwise; connectivity is not checked.
- `mst` — entries are weights (0 means no edge); prints the edges of a
  minimum spanning tree grown from node 0 with Prim's algorithm.

### Exercises

- `balanced` — prints `yes` when every `()`, `[]`, `{}` and `<>` bracket in the
  file is closed in order, `no` otherwise.
- `edit-distance` — the file holds two words; prints their Levenshtein
  distance.
- `stack` — the file holds `PUSH n` and `POP` commands; prints what is left
  on the stack, top first, one number per line. Any other command prints
  `UNEXPECTED INPUT`.

## Using the library

```python
from archlab.cache import SetAssociativeCache, simulate, format_stats
from archlab.numrep import convert, double_to_bits
from archlab.graphs import find_cycle
from archlab.exercises import edit_distance, is_balanced

with open("trace.txt") as trace:
    stats = simulate(SetAssociativeCache(), trace)
print(format_stats(stats))

print(convert("FF", 16, 2))            # 11111111
print(double_to_bits(1.0))             # 0_01111111111_000...0
print(find_cycle([[1], [2], [0]]))     # [0, 1, 2]
print(edit_distance("kitten", "sitting"))  # 3
print(is_balanced("{[()]}"))           # True
```

## What the package does not do

There are no complex matrix kernels (multiplication or transposition, plain
or cache-blocked), no prime-search or square-root warm-ups, and no job
sorting or interval scheduling. Cache geometry is fixed by the commands;
other sizes are only available by constructing the cache classes directly.