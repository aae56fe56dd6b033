from enum import Enum
from random import Random
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple, Union

from ..helpers import static_assert_unreachable
from .node import Choice, Node, Option, Root, Text

# Counting stops once a tree is known to have more variations than this.
MAX_VARIATIONS = 1_000_000


class Overflow(Enum):
    OVERFLOW = "overflow"


OVERFLOW = Overflow.OVERFLOW

VariationCount = Union[int, Overflow]

_default_random = Random()

# Trees are walked with explicit stacks, so nesting depth is not limited by
# the interpreter's recursion limit.


def serialize(node: Optional[Node]) -> str:
    """Turn a tree back into spintax text. Literal "{", "|" and "}" inside
    text are written as-is, so such text does not survive a round trip."""
    out: List[str] = []
    todo: List[Union[str, Node, None]] = [node]
    while todo:
        item = todo.pop()
        if item is None:
            continue
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, Text):
            out.append(item.content)
        elif isinstance(item, Option):
            out.append(item.content)
            todo.extend(reversed(item.children))
        elif isinstance(item, Choice):
            out.append("{")
            todo.append("}")
            for i, child in enumerate(reversed(item.children)):
                if i > 0:
                    todo.append("|")
                todo.append(child)
        elif isinstance(item, Root):
            todo.extend(reversed(item.children))
        else:
            static_assert_unreachable(item)
    return "".join(out)


def _count_all(counts: Sequence[int], limit: int) -> VariationCount:
    res = 1
    for count in counts:
        res *= count
        if res > limit:
            return OVERFLOW
    return res


def _count_either(counts: Sequence[int], limit: int) -> VariationCount:
    if not counts:
        return 1
    res = 0
    for count in counts:
        res += count
        if res > limit:
            return OVERFLOW
    return res


def _count_table(node: Node, limit: int) -> Optional[Dict[int, int]]:
    """Count every node of the tree, keyed by id. Returns None as soon as
    some subtree has more than limit variations."""
    counts: Dict[int, int] = {}
    todo: List[Tuple[Node, bool]] = [(node, False)]
    while todo:
        item, children_done = todo.pop()
        if isinstance(item, Text):
            counts[id(item)] = 1
            continue
        if not children_done:
            todo.append((item, True))
            todo.extend((child, False) for child in item.children)
            continue
        child_counts = [counts[id(child)] for child in item.children]
        count: VariationCount
        if isinstance(item, (Option, Root)):
            count = _count_all(child_counts, limit)
        elif isinstance(item, Choice):
            count = _count_either(child_counts, limit)
        else:
            static_assert_unreachable(item)
        if count is OVERFLOW:
            return None
        counts[id(item)] = count
    return counts


def count_variations(
    node: Optional[Node], limit: int = MAX_VARIATIONS
) -> VariationCount:
    """Count the distinct renderings of a tree, or return OVERFLOW if there
    are more than limit of them."""
    if node is None:
        return 1
    counts = _count_table(node, limit)
    if counts is None:
        return OVERFLOW
    return counts[id(node)]


def render_random(node: Optional[Node], random: Optional[Random] = None) -> str:
    """Render one variation, picking uniformly among the options of every
    choice. Pass a seeded Random to get reproducible output."""
    rng = random if random is not None else _default_random
    out: List[str] = []
    todo: List[Optional[Node]] = [node]
    while todo:
        item = todo.pop()
        if item is None:
            continue
        if isinstance(item, Text):
            out.append(item.content)
        elif isinstance(item, Option):
            out.append(item.content)
            todo.extend(reversed(item.children))
        elif isinstance(item, Choice):
            if item.children:
                todo.append(item.children[rng.randrange(len(item.children))])
        elif isinstance(item, Root):
            todo.extend(reversed(item.children))
        else:
            static_assert_unreachable(item)
    return "".join(out)


class _Evaluator:
    """Maps seeds in [0, count) to variations. Sequences split the seed in
    mixed radix among their children; choices give each option a contiguous
    range of seeds."""

    def __init__(self, root: Node, limit: int) -> None:
        counts = _count_table(root, limit)
        if counts is None:
            raise ValueError(
                f"Too many variations to enumerate (more than {limit:,})"
            )
        self.counts = counts
        self.total = counts[id(root)]

    def count(self, node: Node) -> int:
        return self.counts[id(node)]

    def _eval_all(self, seed: int, nodes: Sequence[Node]) -> List[Tuple[int, Node]]:
        ret: List[Tuple[int, Node]] = []
        for node in nodes:
            seed, sub_seed = divmod(seed, self.count(node))
            ret.append((sub_seed, node))
        assert seed == 0, "seed must be in [0, prod(counts))"
        return ret

    def _eval_either(self, seed: int, nodes: Sequence[Option]) -> Tuple[int, Node]:
        for node in nodes:
            count = self.count(node)
            if seed < count:
                return seed, node
            seed -= count
        assert False, "seed must be in [0, sum(counts))"

    def evaluate(self, seed: int, node: Node) -> str:
        out: List[str] = []
        todo: List[Tuple[int, Node]] = [(seed, node)]
        while todo:
            seed, item = todo.pop()
            if isinstance(item, Text):
                out.append(item.content)
            elif isinstance(item, Option):
                out.append(item.content)
                todo.extend(reversed(self._eval_all(seed, item.children)))
            elif isinstance(item, Choice):
                if item.children:
                    todo.append(self._eval_either(seed, item.children))
            elif isinstance(item, Root):
                todo.extend(reversed(self._eval_all(seed, item.children)))
            else:
                static_assert_unreachable(item)
        return "".join(out)


def render_variant(node: Node, seed: int, limit: int = MAX_VARIATIONS) -> str:
    """Render the variation with the given index. Every seed in
    [0, count_variations(node)) gives a different choice of options."""
    evaluator = _Evaluator(node, limit)
    if not 0 <= seed < evaluator.total:
        raise ValueError(f"Seed {seed} out of range [0, {evaluator.total})")
    return evaluator.evaluate(seed, node)


def get_all_seeds(total_count: int, random: Random) -> Iterator[int]:
    """Generate all numbers 0..total_count-1 in random order, in expected time
    O(1) per number."""
    seen: Set[int] = set()
    while len(seen) < total_count // 2:
        seed = random.randrange(total_count)
        if seed not in seen:
            seen.add(seed)
            yield seed

    remaining: List[int] = []
    for seed in range(total_count):
        if seed not in seen:
            remaining.append(seed)
    random.shuffle(remaining)
    for seed in remaining:
        yield seed


def enumerate_variants(
    node: Node, random: Optional[Random] = None, limit: int = MAX_VARIATIONS
) -> Iterator[str]:
    """Yield every variation exactly once: in seed order, or shuffled if a
    Random is given. Raises ValueError up front if the count overflows."""
    evaluator = _Evaluator(node, limit)

    def gen() -> Iterator[str]:
        seeds: Iterator[int]
        if random is None:
            seeds = iter(range(evaluator.total))
        else:
            seeds = get_all_seeds(evaluator.total, random)
        for seed in seeds:
            yield evaluator.evaluate(seed, node)

    return gen()
