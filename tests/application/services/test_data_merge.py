from application.services.data_merge import replace_recursive


class TestReplaceRecursive:
    def test_replacement_wins_on_scalars(self):
        assert replace_recursive({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_mappings_are_merged(self):
        base = {"author": {"name": "Bernhard", "image": {"filename": "foobar.png"}}}
        replacement = {"author": {"image": {"size": 123}}}

        assert replace_recursive(base, replacement) == {
            "author": {"name": "Bernhard", "image": {"filename": "foobar.png", "size": 123}}
        }

    def test_non_mapping_replaces_mapping(self):
        marker = object()
        merged = replace_recursive({"image": {"filename": "foobar.png"}}, {"image": marker})
        assert merged == {"image": marker}

    def test_none_replaces_value(self):
        assert replace_recursive({"image": {"filename": "x"}}, {"image": None}) == {"image": None}

    def test_inputs_untouched(self):
        base = {"a": {"b": 1}}
        replacement = {"a": {"c": 2}}
        replace_recursive(base, replacement)
        assert base == {"a": {"b": 1}}
        assert replacement == {"a": {"c": 2}}

    def test_empty_inputs(self):
        assert replace_recursive({}, {}) == {}
