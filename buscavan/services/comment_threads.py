"""
Outils pour les fils de discussion des commentaires.

Les commentaires forment une arène indexée par identifiant : chaque réponse
ne connaît que l'identifiant de son parent.
"""

from typing import Iterable, Optional

from sqlalchemy.orm import Session

from buscavan.models.comment import Comment
from buscavan.schemas.comment import CommentResponse, CommentThread


def build_threads(comments: Iterable[CommentResponse]) -> list[CommentThread]:
    """
    Reconstruit l'arbre des réponses à partir d'une liste plate.
    Un commentaire dont le parent n'est pas dans la liste (autre voyage,
    parent supprimé) est traité comme une racine. L'ordre d'entrée est conservé.
    """
    nodes: dict[int, CommentThread] = {}
    for c in comments:
        nodes[c.id] = CommentThread(**c.model_dump(exclude={"replies"}), replies=[])

    roots = []
    for node in nodes.values():
        parent = nodes.get(node.parent_comment_id) if node.parent_comment_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots


def would_create_cycle(db: Session, comment_id: int, new_parent_id: Optional[int]) -> bool:
    """Vrai si rattacher comment_id sous new_parent_id fermerait une boucle."""
    seen = set()
    current = new_parent_id
    while current is not None and current not in seen:
        if current == comment_id:
            return True
        seen.add(current)
        parent = db.get(Comment, current)
        current = parent.parent_comment_id if parent is not None else None
    return False
