from engconvert.logger import ConversionError, Logger


def test_info_is_logged_verbatim():
    logger = Logger()
    logger.info("Determined file type: text")
    assert logger.messages() == ["Determined file type: text"]


def test_error_and_warning_prefixes():
    logger = Logger()
    logger.error("Unknown input file type")
    logger.warn("something odd")
    assert logger.messages() == [
        "ERROR: Unknown input file type",
        "Warning: something odd",
    ]


def test_messages_keep_order():
    logger = Logger()
    for text in ["a", "b", "c"]:
        logger.info(text)
    assert logger.messages() == ["a", "b", "c"]


def test_context_is_prefixed_and_can_be_cleared():
    logger = Logger()
    logger.set_context("Message 5")
    logger.error("bad")
    logger.set_context("")
    logger.info("plain")
    assert logger.messages() == ["Message 5: ERROR: bad", "plain"]


def test_messages_returns_copy():
    logger = Logger()
    logger.info("one")
    copy = logger.messages()
    copy.append("two")
    assert logger.messages() == ["one"]


def test_new_logger_is_empty():
    assert Logger().messages() == []


def test_conversion_error_carries_message():
    err = ConversionError("broken")
    assert str(err) == "broken"
    assert isinstance(err, Exception)