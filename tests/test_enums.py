from vanillapad.enums import (
    BatteryStatus,
    Button,
    ErrorCode,
    EventType,
    Region,
    VanillaError,
)


def test_button_lookup_by_value_is_consecutive():
    looked_up = [Button(i) for i in range(len(Button))]
    assert looked_up == list(Button)


def test_button_count_is_last():
    assert Button(len(Button) - 1) is Button.COUNT


def test_button_order_groups():
    assert Button(0) is Button.A
    assert Button(18) is Button.AXIS_L_X
    assert Button(30) is Button.AXIS_VOLUME
    assert Button(31) is Button.SENSOR_ACCEL_X
    assert Button(36) is Button.SENSOR_GYRO_ROLL


def test_event_types_consecutive():
    looked_up = [EventType(i) for i in range(len(EventType))]
    assert looked_up == list(EventType)
    assert EventType(0) is EventType.NONE


def test_region_lookup_round_trip():
    for region in Region:
        assert Region(int(region)) is region


def test_battery_status_lookup():
    assert BatteryStatus(0) is BatteryStatus.CHARGING
    assert BatteryStatus(2) is BatteryStatus.VERY_LOW
    assert BatteryStatus(6) is BatteryStatus.FULL


def test_error_codes_are_descending():
    looked_up = [ErrorCode(-i) for i in range(len(ErrorCode))]
    assert looked_up == list(ErrorCode)
    assert ErrorCode(-6) is ErrorCode.BUSY


def test_vanilla_error_from_known_code():
    err = VanillaError(ErrorCode.BUSY, "already running")
    assert err.code is ErrorCode.BUSY
    assert str(err) == "already running"


def test_vanilla_error_default_message():
    err = VanillaError(int(ErrorCode.PIPE_UNRESPONSIVE))
    assert err.code is ErrorCode.PIPE_UNRESPONSIVE
    assert "PIPE_UNRESPONSIVE" in str(err)


def test_vanilla_error_unknown_code_kept():
    err = VanillaError(-99)
    assert err.code == -99
    assert "-99" in err.message