from models.catalog import Item
from models.state import UserProfile
from utils.grading import grade_response
from utils.personalize import GENDER_HINT, personalize_item


def _item(**fields):
    base = {"id": "s::0", "subjectId": "s", "type": "input", "prompt": "p"}
    base.update(fields)
    return Item(**base)


def test_mcq_requires_exact_choice():
    item = _item(type="mcq", answer="Olá", choices=["Olá", "Tchau"])
    assert grade_response(item, "Olá") is True
    assert grade_response(item, "olá") is False
    assert grade_response(item, None) is False


def test_text_answers_are_trimmed_and_case_insensitive():
    item = _item(type="listen", answer=["Bom dia", "bom-dia"])
    assert grade_response(item, "  BOM DIA ") is True
    assert grade_response(item, "boa noite") is False


def test_code_items_check_tokens_or_accept_non_empty():
    tokens = _item(type="code", lang="javascript", checkTokens=["function add", "return"])
    assert grade_response(tokens, "function add(a, b) { return a + b }") is True
    assert grade_response(tokens, "const add = (a, b) => a + b") is False
    free = _item(type="code")
    assert grade_response(free, "x = 1") is True
    assert grade_response(free, "") is False


def test_personalize_is_pure_and_swaps_gendered_forms():
    item = _item(prompt="Thank you (said by a man)", answer=["obrigado"], hints=["starts with o"])
    user = UserProfile(gender="female")
    personalized = personalize_item(item, user)
    assert personalized.prompt == "Thank you (said by a woman)"
    assert personalized.answer == ["obrigada"]
    assert item.prompt == "Thank you (said by a man)"
    assert item.answer == ["obrigado"]


def test_neutral_profile_gets_gender_hint():
    item = _item(prompt="Thank you (said by a man)", answer=["obrigado"])
    personalized = personalize_item(item, UserProfile(gender="neutral"))
    assert personalized.hints == [GENDER_HINT]
    assert personalized.answer == ["obrigado"]


def test_name_placeholders_fall_back_to_profile_name():
    item = _item(prompt="Hi {{user.displayName}}", answer="{{ user.name }}")
    personalized = personalize_item(item, UserProfile())
    assert personalized.prompt == "Hi Player 1"
    assert personalized.answer == "Player 1"


def test_gendered_mcq_choices_follow_the_answer():
    item = _item(type="mcq", prompt="Thank you", choices=["Obrigado", "Olá"], answer="Obrigado")
    for gender, expected in (("female", "Obrigada"), ("male", "Obrigado")):
        personalized = personalize_item(item, UserProfile(gender=gender))
        assert personalized.choices == [expected, "Olá"]
        assert personalized.answer == expected
        graded = {choice: grade_response(personalized, choice) for choice in personalized.choices}
        assert graded == {expected: True, "Olá": False}


def test_placeholder_mcq_is_answerable_by_default_user():
    item = _item(type="mcq", prompt="Your name?", choices=["{{user.name}}", "Maria"], answer="{{user.name}}")
    personalized = personalize_item(item, UserProfile())
    assert personalized.choices == ["Player 1", "Maria"]
    assert grade_response(personalized, "Player 1") is True
    assert grade_response(personalized, "Maria") is False


def test_gender_swap_keeps_the_original_case():
    item = _item(prompt="OBRIGADO and Cansado", answer=["Brasileiro"])
    personalized = personalize_item(item, UserProfile(gender="female"))
    assert personalized.prompt == "OBRIGADA and Cansada"
    assert personalized.answer == ["Brasileira"]
