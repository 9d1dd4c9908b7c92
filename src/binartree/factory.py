"""Factory for key-type specialised tree classes"""

from typing import Any, Dict, Iterable, Optional, Tuple, Type
import logging

from binartree.tree_base import BinaryTreeBase
from binartree.node import NodeBase
from binartree.seqbuf import SeqBufferBase

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[type, Tuple[Type, Type, Type]] = {}


def make_tree_classes(key_type: type) -> Tuple[
    Type[BinaryTreeBase],
    Type[NodeBase],
    Type[SeqBufferBase]
]:
    """
    Factory function to generate tree, node and buffer classes that only
    accept keys of `key_type`.

    Returns:
        BinaryTreeT  – subclass of BinaryTreeBase with NodeClass=NodeT and BufferClass=SeqBufferT.
        NodeT        – subclass of NodeBase with BufferClass=SeqBufferT.
        SeqBufferT   – subclass of SeqBufferBase with KEY_TYPE=key_type.
    """
    if not isinstance(key_type, type):
        raise TypeError(f"make_tree_classes(): key_type must be a type, got {key_type!r}")

    if key_type in _class_cache:
        logger.debug(f"Using cached classes for key_type={key_type.__name__}")
        return _class_cache[key_type]

    name = key_type.__name__
    logger.debug(f"Creating new classes for key_type={name}")

    # 1) Buffer: validates every pushed key
    SeqBufferT = type(
        f"SeqBuffer_{name}",
        (SeqBufferBase,),
        {"KEY_TYPE": key_type, "__slots__": ()}
    )
    logger.debug(f"Created SeqBuffer_{name} with KEY_TYPE={name}")

    # 2) Node: traversals produce the typed buffer
    NodeT = type(
        f"Node_{name}",
        (NodeBase,),
        {"BufferClass": SeqBufferT, "__slots__": ()}
    )
    logger.debug(f"Created Node_{name} with BufferClass={SeqBufferT.__name__}")

    # 3) Tree: wires node and buffer classes together
    BinaryTreeT = type(
        f"BinaryTree_{name}",
        (BinaryTreeBase,),
        {
            "KEY_TYPE": key_type,
            "NodeClass": NodeT,
            "BufferClass": SeqBufferT,
            "__slots__": ()
        }
    )
    logger.debug(f"Created BinaryTree_{name} with NodeClass={NodeT.__name__}")

    _class_cache[key_type] = (BinaryTreeT, NodeT, SeqBufferT)
    return BinaryTreeT, NodeT, SeqBufferT


def create_tree(key_type: type, values: Optional[Iterable[Any]] = None) -> BinaryTreeBase:
    """
    Create a new tree for keys of `key_type`.

    Args:
        key_type (type): The type every key must be an instance of.
        values: Optional keys to insert, in the order given.

    Returns:
        A new tree of the specialised class.
    """
    BinaryTreeT, _, _ = make_tree_classes(key_type)
    tree = BinaryTreeT(values)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with {tree.size} keys")
    return tree
