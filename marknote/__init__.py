"""Marknote - a terminal note editor that understands Markdown task lists."""

from .document import Block, Document, Line, Section
from .lines import classify
from .reorder import Direction, MoveResult, TextEdit, move_block, move_block_down, move_block_up
from .tasks import delete_empty_task, indent_item, outdent_item, toggle_task

__all__ = [
    'Block',
    'Direction',
    'Document',
    'Line',
    'MoveResult',
    'Section',
    'TextEdit',
    'classify',
    'delete_empty_task',
    'indent_item',
    'move_block',
    'move_block_down',
    'move_block_up',
    'outdent_item',
    'toggle_task',
]
