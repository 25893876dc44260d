"""Typed page-builder components.

Every component is `{id, type, order, data}`; `type` selects the shape of
`data`. Style fields live on a shared base every payload extends. Text-bearing
fields accept a plain string or a `{language_code: text}` mapping. Unknown `data`
keys are kept; keys declared by a different component type are rejected.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from languages.multilingual import MultilingualText, resolve_text

COMPONENT_TYPES = ("hero", "text", "image", "gallery", "features", "cta", "spacer")

Text = Optional[MultilingualText]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Padding(_Model):
    top: int | str | None = None
    right: int | str | None = None
    bottom: int | str | None = None
    left: int | str | None = None


class ComponentStyle(_Model):
    background_color: str | None = None
    text_color: str | None = None
    padding: Padding | None = None

    @model_validator(mode="before")
    @classmethod
    def _reject_foreign_fields(cls, value: Any) -> Any:
        if isinstance(value, dict):
            foreign = sorted(k for k in value if k in _FOREIGN_KEYS.get(cls, ()))
            if foreign:
                raise ValueError(f"Not a field of this component: {', '.join(foreign)}")
        return value


class Button(_Model):
    text: Text = None
    link: str | None = None


class HeroData(ComponentStyle):
    title: Text = None
    subtitle: Text = None
    description: Text = None
    hero_button_text: Text = None
    hero_button_link: str | None = None
    primary_button: Button | None = None
    secondary_button: Button | None = None
    background_image: str | None = None
    background_type: str | None = None
    gradient: str | None = None
    height: str | None = None


class TextData(ComponentStyle):
    content: Text = None
    alignment: Literal["left", "center", "right", "justify"] | None = None


class ImageData(ComponentStyle):
    image_url: str | None = None
    alt: Text = None
    caption: Text = None


class GalleryImage(_Model):
    url: str = ""
    thumbnail_url: str | None = None
    alt: Text = None
    caption: Text = None


class GalleryData(ComponentStyle):
    title: Text = None
    subtitle: Text = None
    show_featured: bool | None = None
    columns: int | None = None
    max_items: int | None = None
    images: list[GalleryImage] = Field(default_factory=list)


class Feature(_Model):
    icon: str | None = None
    title: Text = None
    description: Text = None


class FeaturesData(ComponentStyle):
    title: Text = None
    subtitle: Text = None
    features: list[Feature] = Field(default_factory=list)


class CtaData(ComponentStyle):
    title: Text = None
    heading: Text = None
    description: Text = None
    cta_button_text: Text = None
    cta_button_link: str | None = None


class SpacerData(ComponentStyle):
    height: int | None = None


class _Component(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1)
    order: int = 0


class HeroComponent(_Component):
    type: Literal["hero"]
    data: HeroData = Field(default_factory=HeroData)


class TextComponent(_Component):
    type: Literal["text"]
    data: TextData = Field(default_factory=TextData)


class ImageComponent(_Component):
    type: Literal["image"]
    data: ImageData = Field(default_factory=ImageData)


class GalleryComponent(_Component):
    type: Literal["gallery"]
    data: GalleryData = Field(default_factory=GalleryData)


class FeaturesComponent(_Component):
    type: Literal["features"]
    data: FeaturesData = Field(default_factory=FeaturesData)


class CtaComponent(_Component):
    type: Literal["cta"]
    data: CtaData = Field(default_factory=CtaData)


class SpacerComponent(_Component):
    type: Literal["spacer"]
    data: SpacerData = Field(default_factory=SpacerData)


PageComponent = Annotated[
    Union[
        HeroComponent,
        TextComponent,
        ImageComponent,
        GalleryComponent,
        FeaturesComponent,
        CtaComponent,
        SpacerComponent,
    ],
    Field(discriminator="type"),
]

component_adapter: TypeAdapter = TypeAdapter(PageComponent)
component_list_adapter: TypeAdapter = TypeAdapter(list[PageComponent])

DATA_MODELS: dict[str, type[ComponentStyle]] = {
    "hero": HeroData,
    "text": TextData,
    "image": ImageData,
    "gallery": GalleryData,
    "features": FeaturesData,
    "cta": CtaData,
    "spacer": SpacerData,
}


def _field_keys(model: type[BaseModel]) -> set[str]:
    return {key for name, f in model.model_fields.items() for key in (name, f.alias or to_camel(name))}


# Keys that belong to another component type; anything else unknown is kept as-is.
_FOREIGN_KEYS: dict[type[BaseModel], set[str]] = {
    model: set().union(*(_field_keys(m) for m in DATA_MODELS.values())) - _field_keys(model)
    for model in DATA_MODELS.values()
}


def dump_data(data: BaseModel) -> dict:
    return data.model_dump(by_alias=True, exclude_unset=True)


def dump_component(component) -> dict:
    return {
        "id": component.id,
        "type": component.type,
        "order": component.order,
        "data": dump_data(component.data),
    }


# --- defaults ---

# Placeholder copy per language; languages without an entry get English.
_PLACEHOLDERS: dict[str, dict[str, str]] = {
    "hero.title": {
        "nl": "Welkom bij Ons Portfolio",
        "fr": "Bienvenue dans Notre Portfolio",
        "en": "Welcome to Our Portfolio",
    },
    "hero.subtitle": {
        "nl": "Ontdek unieke handgemaakte stukken gemaakt met kwaliteitsmaterialen en aandacht voor detail.",
        "fr": "Découvrez des pièces artisanales uniques fabriquées avec des matériaux de qualité et une attention aux détails.",
        "en": "Discover unique handcrafted pieces made with quality materials and attention to detail.",
    },
    "hero.button": {"nl": "Bekijk Projecten", "fr": "Voir les Projets", "en": "View Projects"},
    "text.content": {
        "nl": "Voeg hier uw tekstinhoud toe...",
        "fr": "Ajoutez votre contenu textuel ici...",
        "en": "Add your text content here...",
    },
    "image.alt": {"nl": "Afbeelding beschrijving", "fr": "Description de l'image", "en": "Image description"},
    "features.title": {"nl": "Onze Troeven", "fr": "Nos Atouts", "en": "Our Strengths"},
    "cta.heading": {
        "nl": "Klaar om Uw Project te Starten?",
        "fr": "Prêt à Commencer Votre Projet?",
        "en": "Ready to Start Your Project?",
    },
    "cta.description": {
        "nl": "Neem contact met ons op om uw ideeën te bespreken en te leren hoe we uw visie tot leven kunnen brengen.",
        "fr": "Contactez-nous pour discuter de vos idées et apprendre comment nous pouvons donner vie à votre vision.",
        "en": "Get in touch to discuss your ideas and learn how we can bring your vision to life.",
    },
    "cta.button": {"nl": "Contact Opnemen", "fr": "Nous Contacter", "en": "Contact Us"},
}


def _placeholder(key: str, language_codes: list[str], *, empty: bool = False) -> dict[str, str]:
    table = _PLACEHOLDERS.get(key, {})
    return {code: "" if empty else table.get(code, table.get("en", "")) for code in language_codes}


def default_component_data(component_type: str, language_codes: list[str]) -> dict:
    """Starting payload for a new component, with placeholder text for each language."""
    codes = list(language_codes)
    if component_type == "hero":
        return {
            "title": _placeholder("hero.title", codes),
            "subtitle": _placeholder("hero.subtitle", codes),
            "heroButtonText": _placeholder("hero.button", codes),
            "heroButtonLink": "/projects",
            "backgroundColor": "#ffffff",
            "textColor": "#000000",
        }
    if component_type == "text":
        return {
            "content": _placeholder("text.content", codes),
            "alignment": "left",
            "backgroundColor": "#ffffff",
            "textColor": "#000000",
        }
    if component_type == "image":
        return {
            "imageUrl": "",
            "alt": _placeholder("image.alt", codes),
            "caption": _placeholder("image.caption", codes, empty=True),
            "backgroundColor": "#ffffff",
        }
    if component_type == "gallery":
        return {"images": [], "backgroundColor": "#ffffff"}
    if component_type == "features":
        return {"title": _placeholder("features.title", codes), "features": [], "backgroundColor": "#ffffff"}
    if component_type == "cta":
        return {
            "heading": _placeholder("cta.heading", codes),
            "description": _placeholder("cta.description", codes),
            "ctaButtonText": _placeholder("cta.button", codes),
            "ctaButtonLink": "/contact",
            "backgroundColor": "#000000",
            "textColor": "#ffffff",
        }
    if component_type == "spacer":
        return {"height": 60, "backgroundColor": "#ffffff"}
    raise ValueError(f"Unknown component type: {component_type}")


# --- localization ---


def _is_text_annotation(annotation: Any) -> bool:
    args = get_args(annotation)
    return str in args and any(a is dict or get_origin(a) is dict for a in args)


def _localize_value(value: Any, language_code: str, default_language_code: str) -> Any:
    if isinstance(value, BaseModel):
        return localize(value, language_code, default_language_code)
    if isinstance(value, list):
        return [_localize_value(v, language_code, default_language_code) for v in value]
    return value


def localize(model: BaseModel, language_code: str, default_language_code: str) -> dict:
    """Dump `model` by alias with every multilingual field resolved to one string."""
    out: dict[str, Any] = {}
    fields_set = model.model_fields_set
    for name, field in type(model).model_fields.items():
        if name not in fields_set:
            continue
        value = getattr(model, name)
        key = field.alias or to_camel(name)
        if _is_text_annotation(field.annotation):
            out[key] = resolve_text(value, language_code, default_language_code)
        else:
            out[key] = _localize_value(value, language_code, default_language_code)
    for key, value in (model.model_extra or {}).items():
        out[key] = value
    return out
