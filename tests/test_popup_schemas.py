import pytest
from PIL import Image
from pydantic import ValidationError

from pipup.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DURATION,
    DEFAULT_MEDIA_WIDTH,
    DEFAULT_MESSAGE_COLOR,
    DEFAULT_MESSAGE_SIZE,
    DEFAULT_TITLE_COLOR,
    DEFAULT_TITLE_SIZE,
)
from pipup.services.popup_schemas import BitmapMedia, Position, PopupProps, parse_float, parse_int


class TestSafeParsing:
    @pytest.mark.parametrize("raw, expected", [("2", 2.0), (" 2.5 ", 2.5), (3, 3.0), (1.5, 1.5)])
    def test_parse_float_accepts_numbers(self, raw, expected) -> None:
        assert parse_float(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "nan", "inf", True, [1]])
    def test_parse_float_rejects_garbage(self, raw) -> None:
        assert parse_float(raw) is None

    def test_parse_int(self) -> None:
        assert parse_int("7") == 7
        assert parse_int(" -1 ") == -1
        assert parse_int("2.5") is None
        assert parse_int(False) is None


class TestPopupProps:
    def test_defaults(self) -> None:
        props = PopupProps()

        assert props.duration == DEFAULT_DURATION
        assert props.position is Position.TopRight
        assert props.background_color == DEFAULT_BACKGROUND_COLOR
        assert props.title is None
        assert props.title_size == DEFAULT_TITLE_SIZE
        assert props.title_color == DEFAULT_TITLE_COLOR
        assert props.message is None
        assert props.message_size == DEFAULT_MESSAGE_SIZE
        assert props.message_color == DEFAULT_MESSAGE_COLOR
        assert props.media is None

    def test_camel_case_keys(self) -> None:
        props = PopupProps.model_validate(
            {
                "backgroundColor": "#FF112233",
                "titleSize": 20,
                "titleColor": "red",
                "messageSize": "14",
                "messageColor": "#00ff00",
                "position": "Center",
                "somethingElse": True,
            }
        )

        assert props.background_color == "#FF112233"
        assert props.title_size == 20
        assert props.title_color == "red"
        assert props.message_size == 14
        assert props.message_color == "#00ff00"
        assert props.position is Position.Center

    @pytest.mark.parametrize("duration", [0, -5, "abc", None, "nan"])
    def test_unusable_duration_falls_back(self, duration) -> None:
        assert PopupProps(duration=duration).duration == DEFAULT_DURATION

    def test_fractional_duration(self) -> None:
        assert PopupProps(duration="2.5").duration == 2.5

    def test_non_positive_sizes_fall_back(self) -> None:
        props = PopupProps(title_size=0, message_size=-1)

        assert props.title_size == DEFAULT_TITLE_SIZE
        assert props.message_size == DEFAULT_MESSAGE_SIZE

    def test_ordinal_and_name_agree(self) -> None:
        assert PopupProps(position=0).position is PopupProps(position="TopRight").position
        assert PopupProps(position=4).position is Position.Center

    @pytest.mark.parametrize("position", ["Middle", 5, -1, True, 1.0])
    def test_invalid_position_is_rejected(self, position) -> None:
        with pytest.raises(ValidationError):
            PopupProps(position=position)

    def test_from_ordinal_range(self) -> None:
        assert Position.from_ordinal(3) is Position.BottomLeft
        with pytest.raises(ValueError):
            Position.from_ordinal(len(Position))

    def test_invalid_color_string_falls_back(self) -> None:
        props = PopupProps(background_color="not-a-color", title_color="#12345")

        assert props.background_color == DEFAULT_BACKGROUND_COLOR
        assert props.title_color == DEFAULT_TITLE_COLOR

    def test_non_string_color_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PopupProps.model_validate({"titleColor": 255})

    def test_non_string_title_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PopupProps.model_validate({"title": 5})

    def test_is_frozen(self) -> None:
        props = PopupProps(title="x")
        with pytest.raises(ValidationError):
            props.title = "y"

    def test_reencode_preserves_explicit_fields(self) -> None:
        payload = {"title": "Hi", "message": "there", "duration": 2, "position": "BottomLeft", "titleColor": "#abcdef"}

        props = PopupProps.model_validate(payload)
        again = PopupProps.model_validate(props.model_dump(by_alias=True))

        assert again == props
        dumped = again.model_dump(by_alias=True)
        for key, value in payload.items():
            assert dumped[key] == value

    def test_debug_string(self) -> None:
        text = str(PopupProps(title="Hi", duration=2))

        assert text == (
            "PopupProps(duration=2, position=TopRight, backgroundColor=#CC000000, title=Hi, "
            "titleSize=16, titleColor=#ffffff, message=None, messageSize=12, "
            "messageColor=#ffffff, media=None)"
        )


class TestBitmapMedia:
    def test_width_defaults_when_unusable(self) -> None:
        image = Image.new("RGB", (2, 2))

        assert BitmapMedia(image=image, width="wide").width == DEFAULT_MEDIA_WIDTH
        assert BitmapMedia(image=image, width="0").width == DEFAULT_MEDIA_WIDTH
        assert BitmapMedia(image=image, width="200").width == 200

    def test_payload_carries_image_as_data_uri(self) -> None:
        media = BitmapMedia(image=Image.new("RGB", (4, 3)), width=120)
        props = PopupProps(title="pic", media=media)

        payload = props.to_payload()

        assert payload["media"]["width"] == 120
        assert payload["media"]["image"].startswith("data:image/png;base64,")
        assert payload["position"] == "TopRight"
        assert "media=Bitmap(size=4x3, width=120)" in str(props)


class TestNumericTypes:
    @pytest.mark.parametrize("value", [{"a": 1}, [2], True, False])
    def test_non_numeric_types_are_rejected(self, value) -> None:
        with pytest.raises(ValidationError):
            PopupProps(duration=value)

    def test_parse_float_survives_huge_integers(self) -> None:
        assert parse_float(10**400) is None
        assert PopupProps(title_size=10**400).title_size == DEFAULT_TITLE_SIZE
