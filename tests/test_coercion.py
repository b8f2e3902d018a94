from kodiconf.core.coercion import (
    MIB,
    RawSetting,
    SETTINGS_SCHEMA,
    SettingsCoercer,
    settings_fields,
    typed_value,
    validate_schema,
)


def _coerce(*settings):
    return SettingsCoercer().coerce(list(settings))


def test_enum_and_number_parse_as_int():
    typed = _coerce(
        RawSetting("download_storage", "enum", "1"),
        RawSetting("proxy_port", "number", "1080"),
    )
    assert typed == {"download_storage": 1, "proxy_port": 1080}


def test_unparsable_enum_degrades_to_zero():
    typed = _coerce(RawSetting("encryption_policy", "enum", "abc"))
    assert typed["encryption_policy"] == 0


def test_slider_percent_truncates_to_int():
    typed = _coerce(RawSetting("percentage_additional_seeders", "slider", "42.0", "percent"))
    value = typed["percentage_additional_seeders"]
    assert value == 42
    assert isinstance(value, int)


def test_slider_int_truncates_fraction():
    typed = _coerce(RawSetting("buffer_size", "slider", "19.9", "int"))
    assert typed["buffer_size"] == 19


def test_slider_float_keeps_fraction():
    typed = _coerce(RawSetting("ratio", "slider", "0.5", "float"))
    assert typed["ratio"] == 0.5
    assert isinstance(typed["ratio"], float)


def test_slider_non_positive_float_falls_back_to_int_form():
    # Known ambiguity: zero and negative float sliders are stored as the int form
    typed = _coerce(
        RawSetting("zero", "slider", "0.0", "float"),
        RawSetting("negative", "slider", "-1.5", "float"),
    )
    assert typed["zero"] == 0 and isinstance(typed["zero"], int)
    assert typed["negative"] == 0 and isinstance(typed["negative"], int)


def test_slider_garbage_is_zero():
    typed = _coerce(
        RawSetting("a", "slider", "nope", "int"),
        RawSetting("b", "slider", "inf", "percent"),
    )
    assert typed == {"a": 0, "b": 0}


def test_bool_only_true_token():
    typed = _coerce(
        RawSetting("a", "bool", "true"),
        RawSetting("b", "bool", "True"),
        RawSetting("c", "bool", "1"),
    )
    assert typed == {"a": True, "b": False, "c": False}


def test_other_kinds_stay_text():
    typed = _coerce(RawSetting("proxy_host", "text", " host "), RawSetting("p", "folder", "/x/"))
    assert typed == {"proxy_host": " host ", "p": "/x/"}


def test_typed_value_degrades_missing_and_mistyped():
    typed = {"trakt_token": 12, "proxy_port": True, "ratio": 3}
    assert typed_value(typed, "missing", int) == 0
    assert typed_value(typed, "missing", str) == ""
    assert typed_value(typed, "trakt_token", str) == ""
    assert typed_value(typed, "proxy_port", int) == 0
    assert typed_value(typed, "ratio", float) == 3.0


def test_settings_fields_scales_sizes_and_renames():
    fields = settings_fields(
        {
            "memory_size": 100,
            "buffer_size": 20,
            "max_upload_rate": 5,
            "max_download_rate": 0,
            "trakt_sync": 12,
            "unaired_seasons": True,
        }
    )
    assert fields["memory_size"] == 100 * MIB
    assert fields["buffer_size"] == 20 * MIB
    assert fields["upload_rate_limit"] == 5 * 1024
    assert fields["download_rate_limit"] == 0
    assert fields["trakt_sync_frequency"] == 12
    assert fields["show_unaired_seasons"] is True
    assert len(fields) == len(SETTINGS_SCHEMA)


def test_validate_schema_reports_missing_and_mismatched():
    raw = [RawSetting(entry.key, "text", "") for entry in SETTINGS_SCHEMA if entry.kind is str]
    raw.append(RawSetting("download_storage", "bool", "true"))
    problems = validate_schema(raw)

    assert "download_storage: declared 'bool' produces bool, expected int" in problems
    assert "proxy_port: missing" in problems
    assert not any(p.startswith("proxy_host") for p in problems)
