import json
from typing import Any, Dict, List, Sequence

from blockstack.block import BlockInfo
from blockstack.config import Option
from blockstack.errors import EmptyStackError, UnmappedBlockError

# seconds the show server keeps an order alive
ORDER_LIFETIME = 3.0


def make_order(option: Option, block: BlockInfo) -> Dict[str, Any]:
    """Order entry for one block, looked up through the block-instruction map."""
    key = block.to_key()
    inst = option.instruction_for(key)
    if inst is None:
        raise UnmappedBlockError(key)
    return {
        "id": inst.name,
        "lifetime": ORDER_LIFETIME,
        "param": dict(inst.param),
    }


def make_orders(option: Option, blocks: Sequence[BlockInfo]) -> Dict[str, List[Dict[str, Any]]]:
    """Orders payload for the whole stack, in stack order."""
    if not blocks:
        raise EmptyStackError("block count should be a natural number")
    return {"orders": [make_order(option, block) for block in blocks]}


def make_orders_json(option: Option, blocks: Sequence[BlockInfo]) -> str:
    return json.dumps(make_orders(option, blocks))
