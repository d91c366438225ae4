from fastapi import APIRouter, Depends

from ..flows.review import ReviewFlow
from ..models.review import (
    FlashcardStats,
    ReviewGradeRequest,
    ReviewGradeResponse,
    ReviewRecord,
    SavedStateResponse,
)
from ..store import store

router = APIRouter(tags=["review"])


def get_review_flow() -> ReviewFlow:
    return ReviewFlow(store)


@router.get("/items", response_model=list[ReviewRecord], summary="保存済みカード一覧")
def list_items(flow: ReviewFlow = Depends(get_review_flow)) -> list[ReviewRecord]:
    """Return every saved record in insertion order."""
    return flow.records()


@router.get("/items/{item_id}", response_model=SavedStateResponse, summary="保存状態の確認")
def item_state(item_id: str, flow: ReviewFlow = Depends(get_review_flow)) -> SavedStateResponse:
    return SavedStateResponse(item_id=item_id, saved=flow.is_saved(item_id))


@router.put("/items/{item_id}", response_model=SavedStateResponse, summary="カードとして保存（冪等）")
def save_item(item_id: str, flow: ReviewFlow = Depends(get_review_flow)) -> SavedStateResponse:
    flow.save(item_id)
    return SavedStateResponse(item_id=item_id, saved=True)


@router.delete("/items/{item_id}", response_model=SavedStateResponse, summary="カードの削除")
def remove_item(item_id: str, flow: ReviewFlow = Depends(get_review_flow)) -> SavedStateResponse:
    flow.remove(item_id)
    return SavedStateResponse(item_id=item_id, saved=False)


@router.post("/items/{item_id}/toggle", response_model=SavedStateResponse, summary="保存/削除の切り替え")
def toggle_item(item_id: str, flow: ReviewFlow = Depends(get_review_flow)) -> SavedStateResponse:
    return SavedStateResponse(item_id=item_id, saved=flow.toggle(item_id))


@router.get("/due", response_model=list[ReviewRecord], summary="復習期限が来たカード")
def due_items(flow: ReviewFlow = Depends(get_review_flow)) -> list[ReviewRecord]:
    """Return records due as of now, in saved order (no prioritisation)."""
    return flow.due()


@router.post("/grade", response_model=ReviewGradeResponse, summary="採点して次回出題時刻を更新")
def grade_item(req: ReviewGradeRequest, flow: ReviewFlow = Depends(get_review_flow)) -> ReviewGradeResponse:
    """Grade a saved item; unknown ids are reported with ok=False rather than an error."""
    updated = flow.review(req.item_id, req.quality)
    return ReviewGradeResponse(ok=updated is not None, record=updated)


@router.get("/stats", response_model=FlashcardStats, summary="進捗統計（総数/期限到来/習得済み）")
def stats(flow: ReviewFlow = Depends(get_review_flow)) -> FlashcardStats:
    return flow.stats()
