"""
Tests for the document builder.

Covers scope attachment, nesting, route path extension and every syntax
error a line can raise.
"""

from pathlib import Path

import pytest

from restlang.core import ir
from restlang.core.errors import ErrorKind, ParseError
from restlang.core.manifest import ParserOptions
from restlang.core.parser import parse, parse_file


def parse_error(text: str, options: ParserOptions | None = None) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse(text, options)
    return exc_info.value


class TestResources:
    """Top-level resources and their methods."""

    def test_simple_source(self, simple_source: str) -> None:
        doc = parse(simple_source)

        assert len(doc) == 1
        resource = doc[0]
        assert isinstance(resource, ir.Resource)
        assert resource.name == "todo"
        assert resource.path == "/todo"

        method = resource.methods[0]
        assert method.verb == "GET"
        assert method.path == "/todo/:id"
        assert method.params is not None
        assert method.params["id"] == ir.Parameter(datatype="int64", required=True)

    def test_absent_maps_stay_none(self, simple_source: str) -> None:
        method = parse(simple_source)[0].methods[0]
        assert method.query is None
        assert method.body is None
        assert method.files is None
        assert method.response is None

    def test_resources_close_each_other(self) -> None:
        doc = parse("/a\n#GET\n/b\n#POST\n#PUT")

        assert [r.name for r in doc.resources] == ["a", "b"]
        assert [m.verb for m in doc.resources[0].methods] == ["GET"]
        assert [m.verb for m in doc.resources[1].methods] == ["POST", "PUT"]

    def test_description_lines_are_joined(self) -> None:
        doc = parse("/todo: The list\nof things\nto do")
        assert doc[0].description == "The list of things to do"

    def test_description_without_inline_text(self) -> None:
        doc = parse("/todo\nThings to do")
        assert doc[0].description == "Things to do"

    def test_description_attaches_to_innermost_scope(self) -> None:
        doc = parse("/todo\n#GET\n:id int64: The id\nof the todo")
        method = doc[0].methods[0]
        assert method.description is None
        assert method.params["id"].description == "The id of the todo"

    def test_inline_mutable_and_level(self) -> None:
        doc = parse("/todo mutable level=user\n#DELETE mutable level=admin")
        resource = doc[0]
        assert resource.mutable == ir.Mutable()
        assert resource.authentication == ir.Authentication(level="user")
        assert resource.methods[0].mutable is not None
        assert resource.methods[0].authentication.level == "admin"

    def test_method_keeps_alias_name(self) -> None:
        method = parse("/todo\n#ADD")[0].methods[0]
        assert method.name == "add"
        assert method.verb == "POST"

    def test_find_methods(self) -> None:
        resource = parse("/todo\n#ENTRY\n#COLLECTION\n#ADD")[0]
        assert [m.name for m in resource.find_methods("get")] == ["entry", "collection"]


class TestTodoFixture:
    """The todo example end to end."""

    def test_single_resource(self, todo_document: ir.Document) -> None:
        assert len(todo_document) == 1
        resource = todo_document.get_resource("todo")
        assert resource is not None
        assert resource.description == "The Todo List A simple list of things to do."
        assert resource.identity == [ir.Identity(name="id", description="The todo id")]

    def test_method_verbs_and_paths(self, todo_document: ir.Document) -> None:
        methods = todo_document[0].methods
        assert [(m.name, m.verb, m.path) for m in methods] == [
            ("collection", "GET", "/todo"),
            ("entry", "GET", "/todo/:id"),
            ("add", "POST", "/todo"),
            ("save", "PUT", "/todo/:id"),
            ("remove", "DELETE", "/todo/:id"),
        ]

    def test_querystring(self, todo_document: ir.Document) -> None:
        query = todo_document[0].methods[0].query
        assert list(query) == ["done", "page"]
        assert query["done"].description == "Filter by completion"
        assert query["page"].default == "1"

    def test_response_order(self, todo_document: ir.Document) -> None:
        assert list(todo_document[0].methods[0].response) == ["id", "title", "done"]

    def test_add(self, todo_document: ir.Document) -> None:
        add = todo_document[0].methods[2]
        assert add.mutable == ir.Mutable()
        assert add.body["title"] == ir.Parameter(
            datatype="string200", required=True, description="What to do"
        )
        assert add.body["done"].default == "false"
        assert add.command == ir.Command(
            reference="handlers/todo.js:create",
            file="handlers/todo.js",
            handler="create",
        )

    def test_mutable_property(self, todo_document: ir.Document) -> None:
        save = todo_document[0].methods[3]
        assert save.mutable == ir.Mutable(description="Replaces the todo")

    def test_method_level(self, todo_document: ir.Document) -> None:
        remove = todo_document[0].methods[4]
        assert remove.authentication == ir.Authentication(level="admin")
        assert remove.mutable is None


class TestNesting:
    """Repeated leading symbols."""

    def test_nested_fixture_fields(self, api_fixtures_dir: Path) -> None:
        doc = parse_file(api_fixtures_dir / "nested.api")
        get = doc[0].methods[0]

        items = get.response["items"]
        assert items.datatype == "array"
        assert list(items.fields) == ["id", "title", "tags"]
        assert items.fields["tags"].fields["name"].datatype == "string40"
        assert get.response["name"].fields is None

    def test_nested_fixture_resources(self, api_fixtures_dir: Path) -> None:
        doc = parse_file(api_fixtures_dir / "nested.api")

        assert [(r.name, r.path) for r in doc.resources] == [
            ("list", "/list"),
            ("item", "/list/item"),
        ]
        item = doc.get_resource("item")
        assert item.parent == [
            ir.Parent(resource="list", name="listid", description="The owning list")
        ]

        add = item.methods[0]
        assert add.path == "/list/item/:listid"
        assert list(add.body["item"].fields) == ["title", "due"]
        assert add.query["expand"].datatype == "boolean"

    def test_nested_query_under_query(self) -> None:
        doc = parse("/todo\n#GET\n?filter object\n??name string\n??tag string")
        query = doc[0].methods[0].query
        assert list(query) == ["filter"]
        assert list(query["filter"].fields) == ["name", "tag"]

    def test_nesting_returns_to_shallower_level(self) -> None:
        doc = parse("/todo\n#GET\n|a object\n||b object\n|||c string\n||d string")
        a = doc[0].methods[0].response["a"]
        assert list(a.fields) == ["b", "d"]
        assert list(a.fields["b"].fields) == ["c"]

    def test_sibling_nested_resources(self) -> None:
        doc = parse("/a\n//b\n//c\n#GET")
        assert [r.path for r in doc.resources] == ["/a", "/a/b", "/a/c"]
        assert doc.get_resource("c").methods[0].path == "/a/c"
        assert doc.get_resource("b").methods == []

    def test_deeply_nested_resources(self) -> None:
        doc = parse("/a\n//b\n///c")
        assert doc.get_resource("c").path == "/a/b/c"

    def test_nested_field_without_parent(self) -> None:
        error = parse_error("/todo\n#GET\n??filter string")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT
        assert error.line == 2

    def test_nested_field_of_another_family(self) -> None:
        error = parse_error("/todo\n#GET\n?filter object\n@@name string")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT

    def test_nested_resource_without_parent(self) -> None:
        error = parse_error("//item")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT


class TestMessages:
    """Receivers and emitters."""

    def test_chat_fixture(self, api_fixtures_dir: Path) -> None:
        doc = parse_file(api_fixtures_dir / "chat.api")

        assert [e.kind for e in doc] == ["receiver", "emitter"]
        receiver = doc.receivers[0]
        assert receiver.name == "message"
        assert receiver.description == "A chat message sent by a client"
        assert list(receiver.body) == ["room", "text"]
        assert receiver.body["text"].required

        emitter = doc.emitters[0]
        assert list(emitter.response) == ["room", "from", "text", "sent"]
        assert emitter.response["sent"].datatype == "datetime"

    def test_empty_message(self) -> None:
        doc = parse(">ping")
        assert doc[0] == ir.Receiver(name="ping")

    def test_receiver_rejects_response(self) -> None:
        error = parse_error(">message\n|id int64")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT
        assert "receiver" in error.message

    def test_emitter_rejects_body(self) -> None:
        error = parse_error("<notice\n@id int64")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT

    def test_methods_need_a_resource(self) -> None:
        error = parse_error(">message\n#GET")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT


class TestFields:
    """Field storage and route parameters."""

    def test_route_parameter_appended_once(self) -> None:
        method = parse("/todo\n#GET\n:id int64\n:id int64 required")[0].methods[0]
        assert method.path == "/todo/:id"
        assert method.params["id"].required

    def test_multiple_route_parameters(self) -> None:
        method = parse("/todo\n#GET\n:list int64\n:id int64")[0].methods[0]
        assert method.path == "/todo/:list/:id"

    def test_route_parameter_does_not_change_resource_path(self) -> None:
        resource = parse("/todo\n#GET\n:id int64\n#POST")[0]
        assert resource.path == "/todo"
        assert resource.methods[1].path == "/todo"

    def test_duplicate_field_merges(self) -> None:
        query = parse("/todo\n#GET\n?q string: First\n?q text")[0].methods[0].query
        assert query["q"].datatype == "text"
        assert query["q"].description == "First"

    def test_strict_duplicates(self) -> None:
        error = parse_error(
            "/todo\n#GET\n?q string\n?q text",
            ParserOptions(strict_duplicates=True),
        )
        assert error.kind == ErrorKind.DUPLICATE_NAME
        assert error.line == 3

    def test_same_name_in_other_family_is_not_duplicate(self) -> None:
        method = parse(
            "/todo\n#GET\n?id int64\n|id int64",
            ParserOptions(strict_duplicates=True),
        )[0].methods[0]
        assert "id" in method.query
        assert "id" in method.response

    def test_files(self) -> None:
        method = parse("/todo\n#POST\n$attachment binary required")[0].methods[0]
        assert method.files["attachment"] == ir.Parameter(datatype="binary", required=True)

    def test_inline_field_level(self) -> None:
        method = parse("/todo\n#GET\n|secret string level=admin")[0].methods[0]
        assert method.response["secret"].authentication.level == "admin"


class TestProperties:
    """Identity, parent, mutable and authentication."""

    def test_identity_on_method(self) -> None:
        resource = parse("/todo\n#GET\n.identity id")[0]
        assert resource.identity is None
        assert resource.methods[0].identity == [ir.Identity(name="id")]

    def test_multiple_identities(self) -> None:
        resource = parse("/todo\n.identity a\n.identity b")[0]
        assert [i.name for i in resource.identity] == ["a", "b"]

    def test_property_description_continues(self) -> None:
        resource = parse("/todo\n.identity id: The\nidentifier")[0]
        assert resource.identity[0].description == "The identifier"

    def test_authentication_overrides_field(self) -> None:
        method = parse("/todo\n#GET\n:id int64\n.authentication level=admin")[0].methods[0]
        assert method.params["id"].authentication == ir.Authentication(level="admin")
        assert method.authentication is None

    def test_authentication_on_method(self) -> None:
        method = parse("/todo\n#GET: Fetch\n.authentication level=user: Users only")[0].methods[0]
        assert method.authentication == ir.Authentication(level="user", description="Users only")

    def test_authentication_on_resource(self) -> None:
        resource = parse("/todo\n.authentication level=admin")[0]
        assert resource.authentication.level == "admin"

    def test_property_after_field_goes_to_method(self) -> None:
        method = parse("/todo\n#PUT\n@title string\n.mutable")[0].methods[0]
        assert method.mutable == ir.Mutable()

    def test_command_without_handler(self) -> None:
        command = parse("/todo\n#GET\n{listTodos}")[0].methods[0].command
        assert command == ir.Command(reference="listTodos")


class TestErrors:
    """Each error kind, with the offending line."""

    def test_empty_source(self) -> None:
        assert parse_error("\n\n").kind == ErrorKind.EMPTY_SOURCE

    def test_method_without_resource(self) -> None:
        error = parse_error("#GET")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT
        assert error.line == 0
        assert error.text == "#GET"
        assert "does not apply to a resource" in error.message

    def test_field_without_method(self) -> None:
        error = parse_error("/todo\n:id int64")
        assert error.kind == ErrorKind.INVALID_SCOPE_ATTACHMENT
        assert error.line == 1
        assert error.text == ":id int64"

    def test_description_first(self) -> None:
        assert parse_error("Hello\n/todo").kind == ErrorKind.INVALID_SCOPE_ATTACHMENT

    def test_command_without_method(self) -> None:
        assert parse_error("/todo\n{a.js:b}").kind == ErrorKind.INVALID_SCOPE_ATTACHMENT

    def test_property_without_holder(self) -> None:
        assert parse_error(">message\n.mutable").kind == ErrorKind.INVALID_SCOPE_ATTACHMENT

    def test_unrecognized_property(self) -> None:
        error = parse_error("/todo\n.frobnicate")
        assert error.kind == ErrorKind.UNRECOGNIZED_KEYWORD
        assert "frobnicate" in error.message

    def test_unrecognized_keyword(self) -> None:
        assert parse_error("/todo\n.mutable required").kind == ErrorKind.UNRECOGNIZED_KEYWORD

    def test_missing_datatype(self) -> None:
        error = parse_error("/todo\n#GET\n:id required")
        assert error.kind == ErrorKind.MISSING_DATATYPE
        assert "'id'" in error.message

    def test_invalid_datatype_is_missing_datatype(self) -> None:
        assert parse_error("/todo\n#GET\n:id string0").kind == ErrorKind.MISSING_DATATYPE

    def test_missing_identity_name(self) -> None:
        assert parse_error("/todo\n.identity").kind == ErrorKind.MISSING_NAME

    @pytest.mark.parametrize(
        "line,fragment",
        [
            (".parent", "parent resource is missing"),
            (".parent list", "parent id is missing"),
            (".parent list listid extra", "takes a resource and an id"),
        ],
    )
    def test_parent_components(self, line: str, fragment: str) -> None:
        error = parse_error(f"/todo\n{line}")
        assert error.kind == ErrorKind.MISSING_PARENT_COMPONENTS
        assert fragment in error.message

    def test_missing_authentication_level(self) -> None:
        error = parse_error("/todo\n.authentication")
        assert error.kind == ErrorKind.MISSING_AUTHENTICATION_LEVEL

    def test_invalid_verb(self) -> None:
        error = parse_error("/todo\n#FROBNICATE")
        assert error.kind == ErrorKind.INVALID_VERB
        assert "FROBNICATE" in error.message

    @pytest.mark.parametrize("line", ["{a:b:c}", "{:create}", "{todo.js:}", "{todo.js"])
    def test_malformed_command(self, line: str) -> None:
        error = parse_error(f"/todo\n#GET\n{line}")
        assert error.kind == ErrorKind.MALFORMED_COMMAND_REFERENCE

    def test_invalid_name_characters(self) -> None:
        assert parse_error("/to%do").kind == ErrorKind.INVALID_NAME_CHARACTERS

    def test_line_index_counts_normalized_lines(self) -> None:
        error = parse_error("/todo\n\n\n   #GET\n:id")
        assert error.line == 2
        assert error.text == ":id"

    def test_first_error_aborts(self) -> None:
        error = parse_error("#GET\n/todo\n#FROBNICATE")
        assert error.line == 0

    def test_error_string_shows_location(self) -> None:
        error = parse_error("/todo\n:id int64")
        assert str(error).startswith("line 2\n   2 | :id int64\n")

    def test_file_in_error_context(self, tmp_path: Path) -> None:
        source = tmp_path / "broken.api"
        source.write_text("#GET\n", encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            parse_file(source)
        assert str(exc_info.value).startswith(f"{source}:1")


class TestDeterminism:
    """Parsing shares no state between calls."""

    def test_same_text_same_document(self, api_fixtures_dir: Path) -> None:
        text = (api_fixtures_dir / "todo.api").read_text(encoding="utf-8")
        assert parse(text) == parse(text)

    def test_documents_are_independent(self, simple_source: str) -> None:
        first = parse(simple_source)
        first[0].methods.clear()
        assert len(parse(simple_source)[0].methods) == 1
