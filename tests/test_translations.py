"""Tests for message translation."""

from security_admin.services.translations import Translator


def test_untranslated_message_is_returned_with_parameters() -> None:
    translator = Translator()

    message = translator.trans(
        "An unexpected error occurred. [%type% code %code%]",
        "Admin.Notifications.Error",
        {"type": "SessionException", "%code%": 3},
    )

    assert message == "An unexpected error occurred. [SessionException code 3]"


def test_catalog_is_scoped_by_domain() -> None:
    translator = Translator(
        catalogs={"Admin.Notifications.Success": {"Successful deletion": "Supprimé"}}
    )

    assert (
        translator.trans("Successful deletion", "Admin.Notifications.Success")
        == "Supprimé"
    )
    assert translator.trans("Successful deletion") == "Successful deletion"
