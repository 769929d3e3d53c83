import pytest

from flagpole import (
    Argument,
    ArgumentCollection,
    ArgumentStyle,
    DeclarationError,
    DefaultState,
    DuplicateLabelError,
    FlagArgument,
    HelpArgument,
    InvalidLabelError,
    InvalidTypeError,
    Kind,
    NotInChoicesError,
    OptionalArgument,
    PositionalArgument,
    PositionalLabelIsFlagError,
    ShortLabelIsLongFlagError,
    Value,
)


@pytest.mark.parametrize(
    "style, has_flag_like_label, requires_trailing_value, requires_value",
    [
        (ArgumentStyle.POSITIONAL, False, False, True),
        (ArgumentStyle.OPTIONAL, True, True, True),
        (ArgumentStyle.FLAG, True, False, False),
        (ArgumentStyle.HELP, True, False, False),
    ],
)
def test_argument_style_properties(style, has_flag_like_label, requires_trailing_value, requires_value):
    assert style.has_flag_like_label is has_flag_like_label
    assert style.requires_trailing_value is requires_trailing_value
    assert style.requires_value is requires_value


@pytest.mark.parametrize(
    "label, short_label, expected_label, expected_short_label",
    [
        ("--number", "-n", "--number", "-n"),
        ("number", "n", "--number", "-n"),
        ("-n", None, "-n", None),
    ],
)
def test_optional_argument_label_normalization(label, short_label, expected_label, expected_short_label):
    argument = OptionalArgument(label, int, short_label=short_label)
    assert argument.label == expected_label
    assert argument.short_label == expected_short_label
    assert argument.style is ArgumentStyle.OPTIONAL
    assert argument.kind is Kind.INT


def test_argument_all_labels_and_compact_label():
    argument = OptionalArgument("number", short_label="n")
    assert argument.all_labels == ("--number", "-n")
    assert argument.compact_label == "-n"
    assert argument.name == "number"

    argument = OptionalArgument("number")
    assert argument.all_labels == ("--number",)
    assert argument.compact_label == "--number"


def test_optional_argument_short_label_long_flag():
    with pytest.raises(ShortLabelIsLongFlagError) as e:
        OptionalArgument("--number", short_label="--n")
    assert e.value.short_label == "--n"


@pytest.mark.parametrize(
    "label, short_label",
    [
        ("--1number", None),
        ("number of things", None),
        ("--number", "?"),
        ("--", None),
    ],
)
def test_optional_argument_invalid_label(label, short_label):
    with pytest.raises(InvalidLabelError):
        OptionalArgument(label, short_label=short_label)


def test_invalid_label_error_names_the_whole_declaration():
    with pytest.raises(InvalidLabelError) as e:
        FlagArgument("--quiet", short_label="-1")
    assert e.value.labels == ("--quiet", "-1")
    assert e.value.invalid_label == "-1"
    assert str(e.value) == "invalid label '-1' in flag argument ('--quiet', '-1')."


def test_optional_argument_default():
    assert OptionalArgument("--num", int).default.state is DefaultState.NOT_DECLARED
    assert OptionalArgument("--num", int, default=None).default.state is DefaultState.ABSENT

    default = OptionalArgument("--num", int, default=3).default
    assert default.state is DefaultState.VALUE
    assert default.value == Value(Kind.INT, 3)


def test_optional_argument_default_wrong_type():
    with pytest.raises(TypeError):
        OptionalArgument("--num", int, default="3")


def test_optional_argument_choices():
    argument = OptionalArgument("--num", float, choices=[1, 2.5])
    assert argument.choices == (Value(Kind.FLOAT, 1.0), Value(Kind.FLOAT, 2.5))


def test_optional_argument_choices_empty():
    with pytest.raises(DeclarationError):
        OptionalArgument("--num", int, choices=[])


def test_optional_argument_choices_wrong_type():
    with pytest.raises(TypeError):
        OptionalArgument("--num", int, choices=[1, "2"])


def test_default_outside_choices_is_accepted():
    argument = OptionalArgument("--num", int, default=5, choices=[3, 4])
    assert argument.default.value == Value(Kind.INT, 5)


def test_unsupported_type():
    with pytest.raises(TypeError):
        OptionalArgument("--num", list)


def test_positional_argument():
    argument = PositionalArgument("count", int, help="How many times")
    assert argument.label == "count"
    assert argument.short_label is None
    assert argument.style is ArgumentStyle.POSITIONAL
    assert argument.kind is Kind.INT
    assert argument.help == "How many times"
    assert not argument.is_optional


@pytest.mark.parametrize("label", ["--count", "-c"])
def test_positional_argument_flag_label(label):
    with pytest.raises(PositionalLabelIsFlagError) as e:
        PositionalArgument(label)
    assert e.value.label == label


def test_positional_argument_invalid_label():
    with pytest.raises(InvalidLabelError):
        PositionalArgument("1count")


def test_flag_argument():
    argument = FlagArgument("quiet", short_label="q")
    assert argument.label == "--quiet"
    assert argument.short_label == "-q"
    assert argument.style is ArgumentStyle.FLAG
    assert argument.kind is Kind.BOOL
    assert argument.default.value == Value(Kind.BOOL, False)
    assert argument.is_optional


def test_help_argument_defaults():
    argument = HelpArgument()
    assert argument.label == "--help"
    assert argument.short_label == "-h"
    assert argument.help == "show this help message and exit"
    assert argument.style is ArgumentStyle.HELP


def test_help_argument_custom():
    argument = HelpArgument("foo", short_label="f")
    assert argument.all_labels == ("--foo", "-f")


def test_argument_direct_construction_validates():
    with pytest.raises(DeclarationError):
        Argument("count", ArgumentStyle.OPTIONAL)
    with pytest.raises(DeclarationError):
        Argument("count", ArgumentStyle.POSITIONAL, short_label="-c")
    with pytest.raises(PositionalLabelIsFlagError):
        Argument("--count", ArgumentStyle.POSITIONAL)


def test_argument_equality():
    assert OptionalArgument("--num", int, short_label="-n") == OptionalArgument("num", int, short_label="n")
    # defaults and choices are not part of equality.
    assert OptionalArgument("--num", int, default=1) == OptionalArgument("--num", int, choices=[1, 2])

    assert OptionalArgument("--num", int) != OptionalArgument("--num", float)
    assert OptionalArgument("--num", int) != OptionalArgument("--num", int, short_label="-n")
    assert OptionalArgument("--num", int, help="a") != OptionalArgument("--num", int, help="b")
    assert OptionalArgument("--num", bool) != FlagArgument("--num")


def test_argument_hash():
    a = OptionalArgument("--num", int, short_label="-n")
    b = OptionalArgument("--num", int, short_label="-n", default=3)
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_argument_parse_value():
    argument = PositionalArgument("count", int, choices=[2, 4, 8, 16])
    assert argument.parse_value("4") == Value(Kind.INT, 4)

    with pytest.raises(InvalidTypeError) as e:
        argument.parse_value("four")
    assert e.value.argument is argument
    assert e.value.token == "four"

    with pytest.raises(NotInChoicesError) as e:
        argument.parse_value("5")
    assert e.value.argument is argument
    assert e.value.token == "5"
    assert [x.value for x in e.value.choices] == [2, 4, 8, 16]


def test_argument_collection_first_duplicate_label():
    collection = ArgumentCollection([FlagArgument("-f"), OptionalArgument("--foo", int, short_label="-f")])
    assert collection.first_duplicate_label() == "-f"

    with pytest.raises(DuplicateLabelError) as e:
        collection.validate()
    assert e.value.label == "-f"


def test_argument_collection_duplicate_with_and_without_prefix():
    collection = ArgumentCollection([FlagArgument("foo"), OptionalArgument("--foo", int, short_label="-f")])
    assert collection.first_duplicate_label() == "--foo"


def test_argument_collection_no_duplicates():
    collection = ArgumentCollection(
        [
            FlagArgument("--foo", short_label="-f"),
            OptionalArgument("--bar", int, short_label="-b"),
            PositionalArgument("baz"),
        ]
    )
    assert collection.first_duplicate_label() is None
    collection.validate()


def test_argument_collection_positional_collides_with_nothing_flag_like():
    # "foo" and "--foo" are different labels.
    collection = ArgumentCollection([PositionalArgument("foo"), FlagArgument("--foo")])
    assert collection.first_duplicate_label() is None


def test_argument_collection_filters():
    flag = FlagArgument("--quiet")
    optional = OptionalArgument("--num", int)
    first = PositionalArgument("first")
    second = PositionalArgument("second")
    collection = ArgumentCollection([first, flag, second, optional])

    assert list(collection.positionals) == [first, second]
    assert list(collection.flag_like) == [flag, optional]
    assert list(collection.filter_by(ArgumentStyle.FLAG)) == [flag]
    assert isinstance(collection.copy(), ArgumentCollection)


def test_argument_collection_rejects_help_argument():
    collection = ArgumentCollection([PositionalArgument("x"), HelpArgument()])
    with pytest.raises(DeclarationError):
        collection.validate()
