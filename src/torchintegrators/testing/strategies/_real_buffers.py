from typing import List

import hypothesis.strategies

from ._doubles import doubles


@hypothesis.strategies.composite
def real_buffers(
    draw: hypothesis.strategies.DrawFn,
    arity: int,
) -> List[float]:
    """Strategy for flat buffers of ``arity`` finite doubles."""
    return draw(
        hypothesis.strategies.lists(
            doubles(), min_size=arity, max_size=arity
        )
    )
