from __future__ import annotations

from typing import TYPE_CHECKING

from rails_goto.contract.models import SourceReference
from rails_goto.resolve import (
    ResolutionContext,
    extract_partial_name,
    resolve_controller,
    resolve_helper,
    resolve_mailer,
    resolve_method,
    resolve_model,
    resolve_service,
    resolve_view,
)
from rails_goto.rules.config import ResolverConfig

if TYPE_CHECKING:
    from pathlib import Path

    from rails_goto.contract.models import ResolvedLocation


def _ref(word: str, line: str = "", *namespace: str) -> SourceReference:
    return SourceReference(
        word=word, line=line or word, cursor_column=0, namespace_path=namespace
    )


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _span(location: ResolvedLocation | None) -> tuple[str, int, int]:
    assert location is not None
    return (location.file_path, location.line, location.column)


# Models, controllers, services


def test_model_relation_resolves_to_class_line(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_model(_ref("author", "  belongs_to :author"), ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/models/author.rb"), 2, 0)
    assert location.end_column == len("class Author")


def test_model_plural_relation_is_singularized(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_model(_ref("categories", "  has_many :categories"), ctx)

    assert location is not None
    assert location.file_path == str(rails_app / "app/models/category.rb")


def test_model_camel_case_receiver_maps_to_snake_case_file(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_model(_ref("BlogPost", "BlogPost.find(1)"), ctx)

    assert location is not None
    assert location.file_path == str(rails_app / "app/models/blog_post.rb")


def test_model_without_class_line_returns_file_start(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_model(_ref("comments", "  has_many :comments"), ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/models/comment.rb"), 0, 0)
    assert location.end_line is None


def test_missing_model_file_is_none(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    assert resolve_model(_ref("widgets", "  has_many :widgets"), ctx) is None


def test_controller_resolves_to_class_line(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_controller(_ref("PostsController"), ctx)

    assert location is not None
    assert _span(location) == (
        str(rails_app / "app/controllers/posts_controller.rb"),
        0,
        0,
    )


def test_controller_keyword_value(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    reference = _ref("posts", 'link_to "All", controller: "posts"')
    location = resolve_controller(reference, ctx)

    assert location is not None
    assert location.file_path.endswith("posts_controller.rb")


def test_namespaced_controller_prefers_nested_directory(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_controller(_ref("ReportsController", "", "Admin"), ctx)

    assert location is not None
    assert _span(location) == (
        str(rails_app / "app/controllers/admin/reports_controller.rb"),
        1,
        2,
    )


def test_service_resolves_to_file_start(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_service(_ref("PaymentService", "PaymentService.new.call"), ctx)

    assert location is not None
    assert _span(location) == (
        str(rails_app / "app/services/payment_service.rb"),
        0,
        0,
    )


def test_missing_service_is_none(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    assert resolve_service(_ref("RefundService"), ctx) is None


# Helpers and mailers


def test_helper_found_by_filename(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_helper(_ref("PostsHelper", "include PostsHelper"), ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/helpers/posts_helper.rb"), 0, 0)


def test_namespaced_helper_in_nested_module(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_helper(_ref("DashboardHelper", "", "Admin"), ctx)

    assert location is not None
    assert _span(location) == (
        str(rails_app / "app/helpers/admin/dashboard_helper.rb"),
        1,
        2,
    )


def test_filename_candidates_are_checked_before_lexical_order(rails_app: Path) -> None:
    _write(rails_app / "app/helpers/a_helper.rb", "module ReportsHelper\nend\n")
    preferred = _write(
        rails_app / "app/helpers/reports_helper.rb", "module ReportsHelper\nend\n"
    )
    ctx = ResolutionContext(root=rails_app)

    location = resolve_helper(_ref("ReportsHelper"), ctx)

    assert location is not None
    assert location.file_path == str(preferred)


def test_helper_full_directory_scan_when_no_filename_matches(rails_app: Path) -> None:
    misc = _write(
        rails_app / "app/helpers/misc.rb",
        "module Admin\n  module ReportsHelper\n  end\nend\n",
    )
    ctx = ResolutionContext(root=rails_app)

    location = resolve_helper(_ref("ReportsHelper", "", "Admin"), ctx)

    assert location is not None
    assert _span(location) == (str(misc), 1, 2)


def test_helper_fallback_directories_in_order(rails_app: Path) -> None:
    body = "module Admin::ReportsHelper\nend\n"
    in_lib = _write(rails_app / "lib/admin/tools.rb", body)
    in_models = _write(rails_app / "app/models/report_support.rb", body)
    in_controllers = _write(rails_app / "app/controllers/concerns/reporting.rb", body)
    ctx = ResolutionContext(root=rails_app)
    reference = _ref("ReportsHelper", "include Admin::ReportsHelper", "Admin")

    found = []
    for path in (in_lib, in_models, in_controllers):
        location = resolve_helper(reference, ctx)
        assert location is not None
        found.append(location.file_path)
        path.unlink()

    assert found == [str(in_lib), str(in_models), str(in_controllers)]
    assert resolve_helper(reference, ctx) is None


def test_fallback_dirs_come_from_config(rails_app: Path) -> None:
    _write(rails_app / "lib/admin/tools.rb", "module Admin::ReportsHelper\nend\n")
    ctx = ResolutionContext(
        root=rails_app, config=ResolverConfig(fallback_dirs=("app/models",))
    )

    assert resolve_helper(_ref("ReportsHelper", "", "Admin"), ctx) is None


def test_mailer_resolves_to_class_line(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_mailer(_ref("UserMailer", "UserMailer.weekly_digest"), ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/mailers/user_mailer.rb"), 0, 0)


def test_mailer_shares_helper_fallback_dirs(rails_app: Path) -> None:
    in_lib = _write(
        rails_app / "lib/mailers/legacy.rb",
        "module Billing\n  class InvoiceMailer\n  end\nend\n",
    )
    ctx = ResolutionContext(root=rails_app)

    location = resolve_mailer(_ref("InvoiceMailer", "", "Billing"), ctx)

    assert location is not None
    assert _span(location) == (str(in_lib), 1, 2)


# Views


def test_extract_partial_name() -> None:
    assert extract_partial_name("form", 'render partial: "form"') == "_form"
    assert extract_partial_name("x", 'render partial: "shared/form"') == "shared/_form"
    assert extract_partial_name("foo", 'render partial: "_foo"') == "_foo"
    assert extract_partial_name("show", "render :show") == "show"
    assert extract_partial_name("header", 'render "shared/header"') == "shared/header"
    assert extract_partial_name("form", "render partial: form_name") == "_form"


def test_partial_in_controller_view_directory(rails_app: Path) -> None:
    controller = rails_app / "app/controllers/posts_controller.rb"
    ctx = ResolutionContext(root=rails_app, current_file=controller)

    location = resolve_view(_ref("form", '    render partial: "form"'), ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/views/posts/_form.html.erb"), 0, 0)


def test_partial_falls_back_to_recursive_search(rails_app: Path) -> None:
    controller = rails_app / "app/controllers/posts_controller.rb"
    ctx = ResolutionContext(root=rails_app, current_file=controller)

    location = resolve_view(_ref("header", 'render partial: "header"'), ctx)

    assert location is not None
    assert location.file_path == str(rails_app / "app/views/shared/_header.html.erb")


def test_render_with_directory_outside_controller(rails_app: Path) -> None:
    view = rails_app / "app/views/posts/index.html.erb"
    ctx = ResolutionContext(root=rails_app, current_file=view)

    location = resolve_view(_ref("shared", '<%= render "shared/header" %>'), ctx)

    assert location is not None
    assert location.file_path == str(rails_app / "app/views/shared/_header.html.erb")


def test_render_symbol_template(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    location = resolve_view(_ref("index", "render :index"), ctx)

    assert location is not None
    assert location.file_path == str(rails_app / "app/views/posts/index.html.erb")


def test_missing_view_is_none(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    assert resolve_view(_ref("sidebar", 'render partial: "sidebar"'), ctx) is None


# Methods and callbacks


def test_callback_method_in_current_file(rails_app: Path) -> None:
    model = rails_app / "app/models/post.rb"
    ctx = ResolutionContext(root=rails_app, current_file=model)

    reference = _ref("normalize_title", "  before_save :normalize_title")
    location = resolve_method(reference, ctx)

    assert location is not None
    assert _span(location) == (str(model), 7, 2)


def test_method_falls_back_to_controller_helper(rails_app: Path) -> None:
    controller = rails_app / "app/controllers/posts_controller.rb"
    ctx = ResolutionContext(root=rails_app, current_file=controller)

    reference = _ref("formatted_title", "    formatted_title(@post)")
    location = resolve_method(reference, ctx)

    assert location is not None
    assert _span(location) == (str(rails_app / "app/helpers/posts_helper.rb"), 1, 2)


def test_method_prefers_editor_buffer_over_disk(rails_app: Path) -> None:
    model = rails_app / "app/models/post.rb"
    ctx = ResolutionContext(
        root=rails_app,
        current_file=model,
        current_lines=("class Post", "  def self.draft", "  end", "end"),
    )

    location = resolve_method(_ref("draft"), ctx)

    assert location is not None
    assert _span(location) == (str(model), 1, 2)


def test_method_without_current_file_is_none(rails_app: Path) -> None:
    ctx = ResolutionContext(root=rails_app)

    assert resolve_method(_ref("normalize_title"), ctx) is None


def test_method_not_found_outside_controller(rails_app: Path) -> None:
    model = rails_app / "app/models/post.rb"
    ctx = ResolutionContext(root=rails_app, current_file=model)

    assert resolve_method(_ref("formatted_title"), ctx) is None
