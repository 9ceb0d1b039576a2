"""Unit tests for provider sign-in buttons."""

import pytest

from authlink.domain.value import AuthProvider
from authlink.interface.web.buttons import render_provider_button


class TestRenderProviderButton:
    def test_google_button_links_to_initiation_route(self):
        html = str(render_provider_button(AuthProvider.GOOGLE, "Sign in with Google"))

        assert html.startswith('<a class="google-button" href="/auth/google/">')
        assert 'class="google-icon"' in html
        assert "<span>Sign in with Google</span>" in html
        assert html.endswith("</a>")

    def test_github_button(self):
        html = str(render_provider_button(AuthProvider.GITHUB, "Continue with GitHub"))

        assert 'href="/auth/github/"' in html
        assert 'class="github-icon"' in html

    def test_text_is_escaped(self):
        html = str(render_provider_button(AuthProvider.GOOGLE, "<b>Hi</b> & bye"))

        assert "<span>&lt;b&gt;Hi&lt;/b&gt; &amp; bye</span>" in html

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            render_provider_button(AuthProvider.GOOGLE, "")

    def test_local_provider_has_no_button(self):
        with pytest.raises(ValueError):
            render_provider_button(AuthProvider.LOCAL, "Sign in")
