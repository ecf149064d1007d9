from pathlib import PurePath

import pytest

from darkroom.paths import gallery_key, gallery_name, gallery_unbound, is_image, link, replace_ext, unbound


@pytest.mark.parametrize("name", ["a.jpg", "a.JPG", "a.jpeg", "a.JPEG", "a.png", "a.Png"])
def test_is_image_accepts(name):
    assert is_image(PurePath("images/Trip") / name)


@pytest.mark.parametrize("name", ["a.gif", "a.txt", "a", "a.jpg.bak", ".jpg2"])
def test_is_image_rejects(name):
    assert not is_image(PurePath("images/Trip") / name)


def test_gallery_key_is_case_folded():
    assert gallery_key(PurePath("images/Trip/a.jpg")) == gallery_key(PurePath("images/trip/B.png"))


def test_gallery_name_keeps_case():
    assert gallery_name(PurePath("images/Summer Trip/a.jpg")) == "Summer Trip"


def test_unbound_strips_root():
    assert unbound(PurePath("images/2020/Trip/a.jpg"), PurePath("images")) == PurePath("2020/Trip/a.jpg")


def test_gallery_unbound_of_root_uses_its_name():
    assert gallery_unbound(PurePath("images"), PurePath("images")) == PurePath("images")
    assert gallery_unbound(PurePath("images/Trip"), PurePath("images")) == PurePath("Trip")


def test_replace_ext():
    assert replace_ext(PurePath("Trip/a.jpeg"), ".jpg") == PurePath("Trip/a.jpg")
    assert replace_ext(PurePath("Trip/a.b.png"), ".html") == PurePath("Trip/a.b.html")
    assert replace_ext(PurePath("Trip/a.png"), "") == PurePath("Trip/a")


def test_link_is_site_absolute():
    assert link(PurePath("Trip/a.html")) == "/Trip/a.html"


def test_link_quotes_special_characters():
    assert link(PurePath("Trip #1/what?.html")) == "/Trip%20%231/what%3F.html"
