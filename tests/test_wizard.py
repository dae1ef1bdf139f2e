"""
Tests for the wizard state controller and URL parsing.
"""

from unittest.mock import patch

import pytest

from errors import AuthenticationRequired, NotFoundError, WizardValidationError
from models import GenerationRequest, WizardStep
from utils import parse_website_url
from workflow.wizard import GenerationWizard, WizardStore, get_wizard_store, merge_updates


def wizard_at(step, **fields):
    return GenerationWizard(GenerationRequest(current_step=step, **fields))


class TestParseWebsiteUrl:

    def test_bare_domain_gets_https(self):
        assert parse_website_url("voorbeeld.nl") == "https://voorbeeld.nl"

    def test_full_url_kept(self):
        assert parse_website_url("https://voorbeeld.nl") == "https://voorbeeld.nl"

    def test_host_is_lowercased_path_is_not(self):
        assert parse_website_url("HTTPS://Voorbeeld.NL/Pagina") == "https://voorbeeld.nl/Pagina"

    @pytest.mark.parametrize("value", ["", "   ", "not a url", "ftp://voorbeeld.nl", "localhost"])
    def test_rejected(self, value):
        assert parse_website_url(value) is None


class TestWebsiteStep:

    def test_empty_url_rejected(self):
        wizard = GenerationWizard()

        with pytest.raises(WizardValidationError) as exc_info:
            wizard.advance(WizardStep.KEYWORD, {"websiteUrl": ""})

        assert exc_info.value.message == "Voer eerst een website URL in"
        assert wizard.step == WizardStep.WEBSITE
        assert wizard.request == GenerationRequest()

    def test_invalid_url_leaves_state_unchanged(self):
        wizard = GenerationWizard()

        with pytest.raises(WizardValidationError) as exc_info:
            wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "not a url"})

        assert exc_info.value.field == "websiteUrl"
        assert wizard.step == WizardStep.WEBSITE
        assert wizard.request.website_url == ""

    def test_bare_domain_is_normalized(self):
        wizard = GenerationWizard()

        request = wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "voorbeeld.nl"})

        assert request.website_url == "https://voorbeeld.nl"
        assert wizard.step == WizardStep.KEYWORD

    def test_full_url_accepted(self):
        wizard = GenerationWizard()
        wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "https://voorbeeld.nl"})
        assert wizard.request.website_url == "https://voorbeeld.nl"


class TestLaterSteps:

    def test_keyword_required(self):
        wizard = wizard_at(WizardStep.KEYWORD, website_url="https://voorbeeld.nl")

        with pytest.raises(WizardValidationError):
            wizard.advance(WizardStep.BUSINESS, {"mainKeyword": "  "})

        wizard.advance(WizardStep.BUSINESS, {"mainKeyword": "tuinmeubelen"})
        assert wizard.step == WizardStep.BUSINESS

    @pytest.mark.parametrize("missing", ["name", "type", "description", "contentType"])
    def test_business_needs_all_fields(self, missing):
        updates = {
            "businessInfo": {"name": "TuinShop", "type": "E-commerce", "description": "Tuinmeubelen"},
            "contentType": "Listicle",
        }
        if missing == "contentType":
            updates["contentType"] = ""
        else:
            updates["businessInfo"][missing] = ""

        wizard = wizard_at(WizardStep.BUSINESS, main_keyword="tuinmeubelen")

        with pytest.raises(WizardValidationError) as exc_info:
            wizard.advance(WizardStep.TONE, updates)

        assert exc_info.value.message == "Vul alle verplichte velden in"
        assert exc_info.value.field == missing
        assert wizard.step == WizardStep.BUSINESS
        assert wizard.request.business_info.name == ""

    def test_business_rejects_unknown_content_type(self):
        wizard = wizard_at(WizardStep.BUSINESS)
        updates = {
            "businessInfo": {"name": "TuinShop", "type": "E-commerce", "description": "Tuinmeubelen"},
            "contentType": "Gedicht",
        }

        with pytest.raises(WizardValidationError):
            wizard.advance(WizardStep.TONE, updates)

    def test_business_info_merged_per_field(self):
        wizard = wizard_at(WizardStep.BUSINESS)
        wizard.update({"businessInfo": {"name": "TuinShop"}})
        wizard.update({"businessInfo": {"type": "E-commerce"}})

        info = wizard.request.business_info
        assert info.name == "TuinShop"
        assert info.type == "E-commerce"
        assert info.country == "Netherlands"

    def test_tone_required(self):
        wizard = wizard_at(WizardStep.TONE)

        with pytest.raises(WizardValidationError):
            wizard.advance(WizardStep.CONTENT, {"toneOfVoice": ""})

        wizard.advance(WizardStep.CONTENT, {"toneOfVoice": "Vriendelijk en informatief"})
        assert wizard.step == WizardStep.CONTENT


class TestNavigation:

    def test_cannot_skip_steps(self):
        wizard = GenerationWizard()

        with pytest.raises(WizardValidationError):
            wizard.advance(WizardStep.BUSINESS, {"websiteUrl": "voorbeeld.nl"})

        assert wizard.step == WizardStep.WEBSITE

    def test_back_keeps_data(self):
        wizard = wizard_at(WizardStep.KEYWORD, website_url="https://voorbeeld.nl")

        wizard.back()

        assert wizard.step == WizardStep.WEBSITE
        assert wizard.request.website_url == "https://voorbeeld.nl"

    def test_back_on_first_step_is_noop(self):
        wizard = GenerationWizard()
        wizard.back()
        assert wizard.step == WizardStep.WEBSITE

    def test_protected_fields_ignored(self):
        request = merge_updates(GenerationRequest(), {"currentStep": "content", "generatedContent": "x"})

        assert request.current_step == WizardStep.WEBSITE
        assert request.generated_content == ""

    def test_wrong_type_rejected(self):
        with pytest.raises(WizardValidationError):
            merge_updates(GenerationRequest(), {"selectedUrls": "niet-een-lijst"})

    def test_validate_does_not_commit(self):
        wizard = GenerationWizard()

        candidate = wizard.validate(WizardStep.KEYWORD, {"websiteUrl": "voorbeeld.nl"})

        assert candidate.current_step == WizardStep.KEYWORD
        assert wizard.step == WizardStep.WEBSITE


class TestSessionMode:

    def test_strict_mode_requires_session(self):
        wizard = GenerationWizard(require_session=True)

        with pytest.raises(AuthenticationRequired):
            wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "voorbeeld.nl"}, session_active=False)

        assert wizard.step == WizardStep.WEBSITE

    def test_strict_mode_with_session(self):
        wizard = GenerationWizard(require_session=True)
        wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "voorbeeld.nl"}, session_active=True)
        assert wizard.step == WizardStep.KEYWORD

    def test_lenient_mode_without_session(self):
        wizard = GenerationWizard(require_session=False)
        wizard.advance(WizardStep.KEYWORD, {"websiteUrl": "voorbeeld.nl"}, session_active=False)
        assert wizard.step == WizardStep.KEYWORD


class TestWizardStore:

    def test_create_get_discard(self):
        store = WizardStore()
        wizard_id, wizard = store.create()

        assert store.get(wizard_id) is wizard
        assert len(store) == 1

        store.discard(wizard_id)
        assert len(store) == 0
        with pytest.raises(NotFoundError):
            store.get(wizard_id)

    def test_discard_unknown(self):
        with pytest.raises(NotFoundError):
            WizardStore().discard("onbekend")

    def test_global_store_is_singleton(self):
        assert get_wizard_store() is get_wizard_store()


class TestKeywordChange:

    def test_new_keyword_clears_old_research(self):
        wizard = wizard_at(WizardStep.KEYWORD, website_url="https://voorbeeld.nl")
        wizard.advance(
            WizardStep.BUSINESS,
            {"mainKeyword": "tuinmeubelen", "research": "Onderzoek tuinmeubelen"},
        )

        wizard.back()
        candidate = wizard.validate(WizardStep.BUSINESS, {"mainKeyword": "tuinstoelen"})

        assert candidate.main_keyword == "tuinstoelen"
        assert candidate.research == ""

    def test_same_keyword_keeps_research(self):
        wizard = wizard_at(
            WizardStep.KEYWORD,
            main_keyword="tuinmeubelen",
            research="Onderzoek tuinmeubelen",
        )

        wizard.advance(WizardStep.BUSINESS, {"mainKeyword": "tuinmeubelen"})

        assert wizard.request.research == "Onderzoek tuinmeubelen"

    def test_new_keyword_with_new_research(self):
        request = GenerationRequest(main_keyword="tuinmeubelen", research="Oud")

        merged = merge_updates(request, {"mainKeyword": "tuinstoelen", "research": "Nieuw"})

        assert merged.research == "Nieuw"


class TestUpdateKeys:

    def test_snake_case_keys(self):
        request = merge_updates(
            GenerationRequest(),
            {"main_keyword": "tuinmeubelen", "business_info": {"name": "TuinShop"}},
        )

        assert request.main_keyword == "tuinmeubelen"
        assert request.business_info.name == "TuinShop"

    def test_unknown_key_rejected(self):
        with pytest.raises(WizardValidationError) as exc_info:
            merge_updates(GenerationRequest(), {"keyword": "tuinmeubelen"})

        assert exc_info.value.field == "keyword"


class TestStepFields:

    def test_update_outside_current_step_rejected(self, tuinshop_request):
        wizard = GenerationWizard(tuinshop_request)

        with pytest.raises(WizardValidationError):
            wizard.update({"websiteUrl": "not a url", "mainKeyword": "", "contentType": "Gedicht"})

        assert wizard.request == tuinshop_request

    def test_update_current_step(self):
        wizard = wizard_at(WizardStep.TONE)
        wizard.update({"tone_of_voice": "Zakelijk"})
        assert wizard.request.tone_of_voice == "Zakelijk"

    def test_advance_with_field_of_other_step_rejected(self):
        wizard = wizard_at(WizardStep.KEYWORD, website_url="https://voorbeeld.nl")

        with pytest.raises(WizardValidationError):
            wizard.advance(WizardStep.BUSINESS, {"mainKeyword": "tuinmeubelen", "websiteUrl": "x"})

        assert wizard.step == WizardStep.KEYWORD
        assert wizard.request.website_url == "https://voorbeeld.nl"

    def test_strict_update_requires_session(self):
        wizard = GenerationWizard(
            GenerationRequest(current_step=WizardStep.KEYWORD),
            require_session=True,
        )

        with pytest.raises(AuthenticationRequired):
            wizard.update({"mainKeyword": "tuinmeubelen"}, session_active=False)

        assert wizard.request.main_keyword == ""

    def test_strict_update_on_website_step_without_session(self):
        wizard = GenerationWizard(require_session=True)
        wizard.update({"websiteUrl": "voorbeeld.nl"}, session_active=False)
        assert wizard.request.website_url == "voorbeeld.nl"


class TestWizardOwnership:

    def test_other_user_cannot_open(self):
        store = WizardStore()
        wizard_id, _ = store.create(owner_id="user_a")

        with pytest.raises(NotFoundError):
            store.get(wizard_id, "user_b")
        with pytest.raises(NotFoundError):
            store.get(wizard_id, None)
        with pytest.raises(NotFoundError):
            store.discard(wizard_id, "user_b")

        assert store.get(wizard_id, "user_a").owner_id == "user_a"

    def test_anonymous_wizard_claimed_on_first_signed_in_use(self):
        store = WizardStore()
        wizard_id, _ = store.create()

        store.get(wizard_id, "user_a")

        with pytest.raises(NotFoundError):
            store.get(wizard_id, "user_b")

    def test_idle_wizards_expire(self):
        store = WizardStore(ttl_seconds=60)

        with patch("workflow.wizard.time.time", return_value=1000.0):
            wizard_id, _ = store.create(owner_id="user_a")
        with patch("workflow.wizard.time.time", return_value=1030.0):
            store.get(wizard_id, "user_a")
        with patch("workflow.wizard.time.time", return_value=1080.0):
            assert store.get(wizard_id, "user_a") is not None
        with patch("workflow.wizard.time.time", return_value=1141.0):
            with pytest.raises(NotFoundError):
                store.get(wizard_id, "user_a")

        assert len(store) == 0
