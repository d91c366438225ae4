from enum import IntEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ReviewQuality(IntEnum):
    """Named quality scores offered by the flashcard buttons.

    採点ボタンに対応する品質スコア。3 未満は想起失敗として扱う。
    任意の整数も受け付けるため、ここに無い値（0, 2 など）も有効。
    """

    AGAIN = 1
    HARD = 3
    GOOD = 4
    EASY = 5


class ReviewRecord(BaseModel):
    """Scheduling state for one saved item.

    保存済みアイテム 1 件分の復習状態。永続化形式は camelCase
    （`wordId`/`savedAt`/`nextReview`/`interval`/`easeFactor`/`repetitions`）で、
    タイムスタンプはすべてエポックからのミリ秒。
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    item_id: str = Field(
        validation_alias=AliasChoices("wordId", "itemId", "item_id"),
        serialization_alias="wordId",
    )
    saved_at: int = Field(alias="savedAt")
    next_review: int = Field(alias="nextReview")
    interval: int = Field(default=0, ge=0)
    ease_factor: float = Field(default=2.5, ge=1.3, alias="easeFactor")
    repetitions: int = Field(default=0, ge=0)

    def is_due(self, now: int) -> bool:
        return self.next_review <= now

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)


class FlashcardStats(BaseModel):
    """Dashboard counts over the saved collection."""

    model_config = ConfigDict(populate_by_name=True)

    total_cards: int = Field(alias="totalCards")
    due_cards: int = Field(alias="dueCards")
    mastered_cards: int = Field(alias="masteredCards")


class SavedStateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(
        validation_alias=AliasChoices("wordId", "itemId", "item_id"),
        serialization_alias="wordId",
    )
    saved: bool


class ReviewGradeRequest(BaseModel):
    """Request model for submitting a review outcome.

    復習結果（品質スコア）をサーバへ送るためのリクエスト。
    範囲外の値も検証せずにそのまま採点へ渡す。
    """

    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("wordId", "itemId", "item_id"),
        serialization_alias="wordId",
    )
    quality: int


class ReviewGradeResponse(BaseModel):
    """採点結果。未登録 ID の場合は ok=False / record=None を返す。"""

    ok: bool
    record: ReviewRecord | None = None
