from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Matches Quiz.article_id
ARTICLE_ID_MAX_LENGTH = 64


class ArticleDto(BaseModel):
    """An article offered as the source of a new quiz."""

    model_config = ConfigDict(populate_by_name=True)

    article_id: str = Field(validation_alias=AliasChoices("article_id", "id", "articleId"),
                            min_length=1, max_length=ARTICLE_ID_MAX_LENGTH)
    title: str
    summary: str = ""

    @field_validator("article_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Some feeds send numeric ids
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("summary", mode="before")
    @classmethod
    def _blank_summary(cls, value):
        return "" if value is None else value
