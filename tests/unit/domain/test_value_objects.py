"""Unit tests for managed instance value objects and desired state."""

import pytest
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from sqlmi_broker.domain.managed_instance.aggregate import ManagedInstanceDesiredState
from sqlmi_broker.domain.managed_instance.exceptions import InvalidSkuError
from sqlmi_broker.domain.managed_instance.value_objects import (
    LicenseType,
    ResourceIdentity,
    Sku,
    SkuName,
    SkuTier,
)


def _desired_state(**overrides) -> ManagedInstanceDesiredState:
    fields = {
        "identity": ResourceIdentity(resource_group="rg1", name="sqlmi1"),
        "location": "westeurope",
        "subnet_id": "/subscriptions/0000/subnets/mi",
        "license_type": LicenseType.BASE_PRICE,
        "storage_size_gb": 32,
        "vcores": 8,
        "sku": Sku.from_name("BC_Gen5"),
        "administrator_login": "sqladmin",
        "administrator_password": SecretStr("hunter2-very-secret"),
    }
    fields.update(overrides)
    return ManagedInstanceDesiredState(**fields)


@pytest.mark.unit
class TestResourceIdentity:
    def test_strips_whitespace(self):
        identity = ResourceIdentity(resource_group=" rg1 ", name="sqlmi1 ")
        assert identity.resource_group == "rg1"
        assert identity.name == "sqlmi1"
        assert str(identity) == "rg1/sqlmi1"

    @pytest.mark.parametrize("field", ["resource_group", "name"])
    def test_rejects_empty_parts(self, field):
        values = {"resource_group": "rg1", "name": "sqlmi1", field: "   "}
        with pytest.raises(PydanticValidationError):
            ResourceIdentity(**values)

    def test_is_immutable_and_hashable(self):
        identity = ResourceIdentity(resource_group="rg1", name="sqlmi1")
        with pytest.raises(PydanticValidationError):
            identity.name = "other"
        assert identity == ResourceIdentity(resource_group="rg1", name="sqlmi1")
        assert len({identity, ResourceIdentity(resource_group="rg1", name="sqlmi1")}) == 1


@pytest.mark.unit
class TestSku:
    @pytest.mark.parametrize(
        "value,name,tier,family",
        [
            ("GP_Gen5", SkuName.GP_GEN5, SkuTier.GENERAL_PURPOSE, "Gen5"),
            ("GeneralPurpose-Gen5", SkuName.GP_GEN5, SkuTier.GENERAL_PURPOSE, "Gen5"),
            ("BusinessCritical_Gen4", SkuName.BC_GEN4, SkuTier.BUSINESS_CRITICAL, "Gen4"),
            ("bc-gen5", SkuName.BC_GEN5, SkuTier.BUSINESS_CRITICAL, "Gen5"),
        ],
    )
    def test_normalises_supported_names(self, value, name, tier, family):
        sku = Sku.from_name(value)
        assert sku.name is name
        assert sku.tier is tier
        assert sku.family == family

    @pytest.mark.parametrize("value", ["", "GP_Gen3", "Hyperscale_Gen5", "GP", "premium"])
    def test_rejects_unsupported_names(self, value):
        with pytest.raises(InvalidSkuError) as exc_info:
            Sku.from_name(value)
        assert exc_info.value.error_code == "INVALID_SKU"
        assert "GP_Gen5" in exc_info.value.details["allowed"]


@pytest.mark.unit
class TestDesiredState:
    def test_password_is_masked_everywhere(self):
        state = _desired_state()

        assert "hunter2" not in str(state)
        assert "hunter2" not in repr(state)
        assert "hunter2" not in str(state.to_log_dict())
        assert "hunter2" not in state.model_dump_json()
        assert state.administrator_password.get_secret_value() == "hunter2-very-secret"

    def test_is_frozen(self):
        state = _desired_state()
        with pytest.raises(PydanticValidationError):
            state.vcores = 16

    @pytest.mark.parametrize("field", ["storage_size_gb", "vcores"])
    @pytest.mark.parametrize("value", [0, -4])
    def test_capacity_must_be_positive(self, field, value):
        with pytest.raises(PydanticValidationError):
            _desired_state(**{field: value})
