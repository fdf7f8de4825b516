"""Content model-entity mappers."""

from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.content.domain.entities import (
    BodyText,
    ContentRecord,
    FormattedText,
    ImageReference,
    ImageStyleRef,
    PublishStatus,
    TermRef,
)
from src.modules.content.infrastructure.models import (
    ContentRecordModel,
    ImageStyleModel,
    TaxonomyTermModel,
)


class ContentRecordMapper(BaseMapper[ContentRecord, ContentRecordModel]):
    """Content record mapper."""

    def to_domain(self, model: ContentRecordModel) -> ContentRecord:
        return self.to_domain_with_terms(model, [])

    def to_domain_with_terms(
        self, model: ContentRecordModel, category_ids: list[str]
    ) -> ContentRecord:
        summary = None
        if model.summary_value:
            summary = FormattedText(
                value=model.summary_value, format=model.summary_format
            )

        body = None
        if model.body_value or model.body_summary:
            body = BodyText(
                value=model.body_value or "",
                summary=model.body_summary,
                format=model.body_format,
            )

        image = None
        if model.image_file_id:
            image = ImageReference(file_id=model.image_file_id, alt=model.image_alt)

        return ContentRecord(
            id=model.id,
            kind=model.kind,
            title=model.title,
            status=PublishStatus(model.status),
            url=model.url,
            summary=summary,
            body=body,
            image=image,
            date=model.date,
            date_end=model.date_end,
            category_ids=category_ids,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class TermMapper(BaseMapper[TermRef, TaxonomyTermModel]):
    """Taxonomy term mapper."""

    def to_domain(self, model: TaxonomyTermModel) -> TermRef:
        return TermRef(
            id=model.id,
            label=model.name,
            url=model.url,
            vocabulary=model.vocabulary,
        )


class ImageStyleMapper(BaseMapper[ImageStyleRef, ImageStyleModel]):
    """Image style mapper."""

    def to_domain(self, model: ImageStyleModel) -> ImageStyleRef:
        return ImageStyleRef(name=model.name, label=model.label)
