import pytest

from podtato import BODY_PARTS
from podtato.aggregator import AggregatedView
from podtato.errors import FatalError
from podtato.parts import PartResult
from podtato.rendering import HOME_TEMPLATE, TEMPLATE_DIR, render_home, template_environment


def _view(**parts):
    return AggregatedView(
        hostname="podtato-7f9",
        version="v1",
        daytime="evening",
        secret_message="",
        parts={n: parts.get(n.replace("-", "_"), PartResult.empty()) for n in BODY_PARTS},
    )


def test_render_includes_identity_and_present_parts():
    hat = PartResult(image="/assets/images/hat/hat-01.svg", served_by="hat-host", version="v3")
    html = render_home(_view(hat=hat))
    assert "podtato-7f9" in html
    assert "Good evening!" in html
    assert 'data-part="hat"' in html
    assert "hat-host" in html
    assert "/assets/images/hat/hat-01.svg" in html
    # Empty parts are left out
    assert 'data-part="left-arm"' not in html


def test_secret_message_is_escaped():
    view = _view()
    view.secret_message = "<b>hi</b>"
    html = render_home(view)
    assert "&lt;b&gt;hi&lt;/b&gt;" in html


def test_unparsable_template_is_fatal(tmp_path):
    (tmp_path / HOME_TEMPLATE).write_text("{% if view %}never closed", encoding="utf-8")
    with pytest.raises(FatalError, match="parse"):
        render_home(_view(), template_dir=tmp_path)


def test_missing_template_is_fatal(tmp_path):
    with pytest.raises(FatalError):
        render_home(_view(), template_dir=tmp_path)


def test_template_execution_failure_is_fatal(tmp_path):
    (tmp_path / HOME_TEMPLATE).write_text("{{ view.no_such_field }}", encoding="utf-8")
    with pytest.raises(FatalError, match="execute"):
        render_home(_view(), template_dir=tmp_path)


def test_default_environment_is_reused():
    render_home(_view())
    render_home(_view())
    env = template_environment(TEMPLATE_DIR)
    assert env is template_environment(TEMPLATE_DIR)
    assert env.get_template(HOME_TEMPLATE) is env.get_template(HOME_TEMPLATE)
