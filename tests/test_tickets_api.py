"""
Ticket endpoint tests.
"""
from unittest.mock import patch
from urllib.parse import quote
from fastapi import status
from sqlalchemy.exc import OperationalError
from app.core.exceptions import PayloadTooLarge
from conftest import auth_headers


def ticket_path(ticket_id: str) -> str:
    return f"/api/tickets/{quote(ticket_id, safe='')}"


# =============================================================================
# TEST: Health Check
# =============================================================================
class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert data["dbCheck"] == "ok"
        assert "timestamp" in data


# =============================================================================
# TEST: List Tickets (GET /api/tickets)
# =============================================================================
class TestGetTickets:
    """Test listing the caller's tickets."""

    def test_get_tickets(self, client, sample_member, sample_registration):
        response = client.get("/api/tickets", headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert len(data["tickets"]) == 1
        ticket = data["tickets"][0]
        assert ticket["id"] == "e1#m1"
        assert ticket["status"] == "Registered"
        assert ticket["event"]["name"] == "Test Event"

    def test_get_tickets_empty(self, client, sample_member):
        response = client.get("/api/tickets", headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tickets"] == []

    def test_get_tickets_unauthorized(self, client):
        response = client.get("/api/tickets")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_tickets_invalid_token(self, client):
        response = client.get("/api/tickets", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# TEST: Ticket View (GET /api/tickets/{ticketId})
# =============================================================================
class TestGetTicketById:
    """Test the member self-service ticket view."""

    def test_get_ticket(self, client, sample_member, sample_registration):
        response = client.get(ticket_path("e1#m1"), headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == "e1#m1"
        assert data["eventId"] == "e1"
        assert data["memberId"] == "m1"
        assert data["member"]["email"] == "member@college.edu"
        assert data["event"]["location"] == "Main Auditorium"
        assert "<svg" in data["qrSvg"]

    def test_get_ticket_qr_is_stable(self, client, sample_member, sample_registration):
        headers = auth_headers(sample_member)
        first = client.get(ticket_path("e1#m1"), headers=headers).json()
        second = client.get(ticket_path("e1#m1"), headers=headers).json()

        assert first["qrSvg"] == second["qrSvg"]

    def test_get_ticket_malformed(self, client, sample_member):
        response = client.get(ticket_path("e1m1"), headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error"] == "Invalid ticket ID"
        assert data["code"] == "malformed_ticket_id"

    def test_get_ticket_not_found(self, client, sample_member, sample_event):
        response = client.get(ticket_path("e1#m1"), headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_ticket_unauthorized(self, client, sample_registration):
        response = client.get(ticket_path("e1#m1"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# TEST: Admission Check (POST /api/tickets/{ticketId}/validity)
# =============================================================================
class TestCheckTicketValidity:
    """Test the organizer scan-time admission check."""

    def test_valid_ticket(self, client, sample_member, sample_registration):
        response = client.post(
            ticket_path("e1#m1") + "/validity",
            headers=auth_headers(sample_member),
            json={"eventCode": 42613}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ticketId": "e1#m1", "valid": True, "reason": "valid"}

    def test_wrong_code(self, client, sample_member, sample_registration):
        response = client.post(
            ticket_path("e1#m1") + "/validity",
            headers=auth_headers(sample_member),
            json={"eventCode": 99999}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["valid"] is False
        assert data["reason"] == "code_mismatch"

    def test_malformed_ticket(self, client, sample_member, sample_registration):
        response = client.post(
            ticket_path("e1m1") + "/validity",
            headers=auth_headers(sample_member),
            json={"eventCode": 42613}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["valid"] is False
        assert data["reason"] == "malformed"

    def test_not_registered(self, client, sample_member, sample_event):
        response = client.post(
            ticket_path("e1#m1") + "/validity",
            headers=auth_headers(sample_member),
            json={"eventCode": 42613}
        )

        assert response.json()["reason"] == "not_found"

    def test_store_failure_is_service_unavailable(self, client, sample_member, sample_registration):
        with patch(
            "app.repositories.event_repository.EventRepository.get_short_code",
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
        ):
            response = client.post(
                ticket_path("e1#m1") + "/validity",
                headers=auth_headers(sample_member),
                json={"eventCode": 42613}
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["code"] == "check_failed"

    def test_negative_code_rejected(self, client, sample_member, sample_registration):
        response = client.post(
            ticket_path("e1#m1") + "/validity",
            headers=auth_headers(sample_member),
            json={"eventCode": -1}
        )

        assert response.status_code == 422


class TestTicketViewStoreFailure:
    """Test that store failures are not reported as missing tickets."""

    def test_lookup_store_failure(self, client, sample_member, sample_registration):
        headers = auth_headers(sample_member)
        with patch(
            "app.repositories.registration_repository.RegistrationRepository.get_by_event_and_member",
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
        ):
            response = client.get(ticket_path("e1#m1"), headers=headers)

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["code"] == "check_failed"

    def test_not_found_error_body(self, client, sample_member, sample_event):
        response = client.get(ticket_path("e1#m1"), headers=auth_headers(sample_member))

        data = response.json()
        assert data["success"] is False
        assert data["code"] == "not_found"


class TestTicketQrRendering:
    """Test ticket view behaviour when the QR code cannot be rendered."""

    def test_qr_overflow_is_generic_render_failure(self, client, sample_member, sample_registration):
        headers = auth_headers(sample_member)
        with patch(
            "app.services.ticket_service.generate_qr_svg",
            side_effect=PayloadTooLarge()
        ):
            response = client.get(ticket_path("e1#m1"), headers=headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "payload_too_large"
        assert data["error"] == "Failed to render ticket QR code"


class TestTicketPathEncoding:
    """Test how percent-encoded ticket ids in the path are resolved."""

    def test_single_encoded_path(self, client, sample_member, sample_registration):
        response = client.get("/api/tickets/e1%23m1", headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == "e1#m1"

    def test_double_encoded_path_is_decoded_twice(self, client, sample_member, sample_registration):
        response = client.get("/api/tickets/e1%2523m1", headers=auth_headers(sample_member))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == "e1#m1"
