"""
structures/
-----------
Tree and list data layer.  Public API:

    from structures import BinaryTree, TreeNode, LinkedList, ListNode
    from structures import InvalidInput
"""

from structures.errors      import InvalidInput
from structures.tree        import BinaryTree, TreeNode
from structures.linked_list import LinkedList, ListNode

__all__ = [
    "InvalidInput",
    "BinaryTree",  "TreeNode",
    "LinkedList",  "ListNode",
]
