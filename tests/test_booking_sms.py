from app.models.booking import BookingDetails, FareDetails
from app.services.booking_service import build_booking_message
from app.utils.errors import ProviderRejected, TransportFailure

FULL_DETAILS = {
    "bookingId": "FT-1024",
    "pickup": "Chennai Central",
    "dropoff": "Pondicherry",
    "pickupDate": "2026-10-21",
    "pickupTime": "06:30",
    "fareDetails": {"total": 2499.5},
    "driverName": "Ravi",
    "driverVehicle": "TN 01 AB 1234",
}


def test_message_from_placeholders_only():
    message = build_booking_message(BookingDetails(), "Fasttrack Drop Taxi")

    assert message == (
        "Fasttrack Drop Taxi Booking Confirmed! ID: N/A From: N/A To: N/A "
        "Date: N/A N/A Fare: ₹N/A Driver: Assigned Soon (N/A) Download App for updates!"
    )
    assert "\n" not in message
    assert "  " not in message
    assert message == message.strip()


def test_message_with_all_details():
    message = build_booking_message(BookingDetails.model_validate(FULL_DETAILS), "Fasttrack Drop Taxi")

    assert message == (
        "Fasttrack Drop Taxi Booking Confirmed! ID: FT-1024 From: Chennai Central To: Pondicherry "
        "Date: 2026-10-21 06:30 Fare: ₹2499.50 Driver: Ravi (TN 01 AB 1234) Download App for updates!"
    )


def test_message_collapses_whitespace_inside_fields():
    details = BookingDetails(pickup="  Anna   Nagar\n East ", fare_details=FareDetails(total=0))

    message = build_booking_message(details, "Fasttrack Drop Taxi")

    assert "From: Anna Nagar East To:" in message
    assert "Fare: ₹0.00" in message


def test_send_booking_sms(client, gateway):
    res = client.post("/api/send-booking-sms", json={"phoneNumber": "98765-43210", "bookingDetails": FULL_DETAILS})

    assert res.status_code == 200
    assert res.json() == {"message": "Booking confirmation SMS sent."}
    (name, body, to, from_), = gateway.calls
    assert name == "send_sms"
    assert to == "+919876543210"
    assert from_ == "+15005550006"
    assert body.startswith("Fasttrack Drop Taxi Booking Confirmed! ID: FT-1024")


def test_send_booking_sms_accepts_empty_details(client, gateway):
    res = client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210", "bookingDetails": {}})

    assert res.status_code == 200
    assert len(gateway.calls) == 1


def test_send_booking_sms_requires_phone_and_details(client, gateway):
    res = client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210"})
    assert res.status_code == 400
    assert res.json() == {"message": "Phone number and booking details are required."}

    res = client.post("/api/send-booking-sms", json={"bookingDetails": FULL_DETAILS})
    assert res.status_code == 400

    assert gateway.calls == []


def test_send_booking_sms_without_sender_number(client, gateway, override_settings):
    override_settings(TWILIO_PHONE_NUMBER="")

    res = client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210", "bookingDetails": {}})

    assert res.status_code == 500
    assert res.json() == {
        "message": "Server configuration error: Twilio phone number for sending SMS is missing."
    }
    assert gateway.calls == []


def test_send_booking_sms_provider_rejection(client, gateway):
    gateway.error = ProviderRejected(400, "The 'To' number is not a valid phone number.")

    res = client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210", "bookingDetails": {}})

    assert res.status_code == 500
    assert res.json() == {"message": "Twilio API Error (400): The 'To' number is not a valid phone number."}


def test_send_booking_sms_transport_failure_is_generic(client, gateway):
    gateway.error = TransportFailure(TimeoutError("read timed out"))

    res = client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210", "bookingDetails": {}})

    assert res.status_code == 500
    assert res.json() == {"message": "Failed to send booking confirmation SMS."}


def test_brand_name_comes_from_settings(client, gateway, override_settings):
    override_settings(BRAND_NAME="Acme Cabs")

    client.post("/api/send-booking-sms", json={"phoneNumber": "9876543210", "bookingDetails": {}})

    assert gateway.calls[0][1].startswith("Acme Cabs Booking Confirmed!")
