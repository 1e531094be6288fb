from ircconnect.irc.notice import channel_from_notice, route_notice


def test_leading_channel_retargets_notice():
    routed = route_notice("ChanServ", "mynick", "[#general] hello world")
    assert routed.to == "#general"
    assert routed.message == "hello world"


def test_plain_notice_passes_through():
    routed = route_notice("server", "#foo", "just text")
    assert routed.to == "#foo"
    assert routed.message == "just text"


def test_bracket_only_gives_empty_message():
    routed = route_notice("ChanServ", "mynick", "[#general]")
    assert routed.to == "#general"
    assert routed.message == ""


def test_bracket_must_start_the_message():
    routed = route_notice("ChanServ", "mynick", "see [#general] for details")
    assert routed.to == "mynick"
    assert routed.message == "see [#general] for details"


def test_bracket_content_must_be_a_channel():
    assert channel_from_notice("[general] hi") is None
    assert channel_from_notice("[#] hi") is None
    assert channel_from_notice("[#a b] hi") is None
    assert channel_from_notice("[#ops] hi") == "#ops"


def test_remainder_is_rejoined_with_single_spaces():
    routed = route_notice("ChanServ", "mynick", "[#general] a  b")
    assert routed.message == "a b"


def test_tab_after_bracket_keeps_the_body():
    routed = route_notice("ChanServ", "mynick", "[#c]\thello\tthere")
    assert routed.to == "#c"
    assert routed.message == "hello there"
