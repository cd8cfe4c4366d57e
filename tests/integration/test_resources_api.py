"""
API tests for environments, custom forms, report downloads and health
"""

from io import BytesIO

from openpyxl import load_workbook

from tagreport.models.custom_forms import CustomFormType
from tagreport.models.environments import Environment
from tagreport.schemas.enums import UserRole

from conftest import db_result, make_result, make_session


def _environment(**overrides):
    fields = dict(
        id=1,
        user_id=1,
        name="Office kitchen",
        service_type="electrical",
        items=[{"type": "appliance", "name": "Kettle", "icon": "📦", "description": ""}],
    )
    fields.update(overrides)
    return Environment(**fields)


def test_create_environment(client, async_session):
    async def refresh(obj, *args, **kwargs):
        obj.id = 4
    async_session.refresh.side_effect = refresh

    response = client.post("/api/environments", json={
        "name": "Workshop",
        "items": [{"type": "power_tool", "name": "Drill"}],
    })

    assert response.status_code == 201
    data = response.json()
    assert data["user_id"] == 1
    assert data["items"][0]["icon"] == "📦"


def test_list_environments(client, async_session):
    async_session.execute.return_value = db_result(scalars=[_environment()])

    response = client.get("/api/environments")

    assert response.status_code == 200
    assert response.json()[0]["items"][0]["name"] == "Kettle"


def test_other_users_environment_is_not_found(client, async_session):
    async_session.execute.return_value = db_result(scalar=None)

    assert client.get("/api/environments/1").status_code == 404


def test_update_environment_replaces_items(client, async_session):
    environment = _environment()
    async_session.execute.return_value = db_result(scalar=environment)

    response = client.put("/api/environments/1", json={"items": [{"type": "appliance", "name": "Toaster"}]})

    assert response.status_code == 200
    assert [item["name"] for item in environment.items] == ["Toaster"]


def test_delete_environment(client, async_session):
    environment = _environment()
    async_session.execute.return_value = db_result(scalar=environment)

    assert client.delete("/api/environments/1").status_code == 204
    async_session.delete.assert_awaited_once_with(environment)


def test_technician_cannot_create_custom_form(client):
    response = client.post("/api/custom-forms", json={"name": "Office", "csv_data": "1,Kettle"})
    assert response.status_code == 403


def test_create_custom_form(client, async_session, as_role):
    as_role(UserRole.SUPPORT_CENTER)

    async def refresh(obj, *args, **kwargs):
        obj.id = 2
    async_session.refresh.side_effect = refresh

    response = client.post("/api/custom-forms", json={
        "name": "School",
        "csv_data": "code,itemName\n1122,3D Printer\n1123,Laminator",
    })

    assert response.status_code == 201
    data = response.json()
    assert [(i["code"], i["item_name"], i["position"]) for i in data["items"]] == [
        ("1122", "3D Printer", 0),
        ("1123", "Laminator", 1),
    ]
    assert isinstance(async_session.add.call_args[0][0], CustomFormType)


def test_create_custom_form_bad_csv(client, as_role):
    as_role(UserRole.SUPER_ADMIN)

    response = client.post("/api/custom-forms", json={"name": "Broken", "csv_data": "1122"})

    assert response.status_code == 400
    assert "Line 1" in response.json()["message"]


def test_technician_can_read_custom_forms(client, async_session):
    async_session.execute.return_value = db_result(scalars=[])

    assert client.get("/api/custom-forms").status_code == 200


def test_pdf_report_download(client, async_session):
    session = make_session()
    async_session.execute.side_effect = [
        db_result(scalar=session),
        db_result(scalar=session),
        db_result(scalars=[make_result(id=1, asset_number="1")]),
    ]

    response = client.get("/api/sessions/1/report.pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="electrical_report_Acme_Pty_Ltd_2024-01-15.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_excel_report_download(client, async_session):
    session = make_session(service_type="fire_testing", country="newzealand")
    async_session.execute.side_effect = [
        db_result(scalar=session),
        db_result(scalar=session),
        db_result(scalars=[make_result(id=1, asset_number="1")]),
    ]

    response = client.get("/api/sessions/1/report.xlsx")

    assert response.status_code == 200
    assert "fire_testing_report_" in response.headers["content-disposition"]
    ws = load_workbook(BytesIO(response.content)).active
    assert ws['A1'].value == 'TEST & TAG REPORT'


def test_report_for_missing_session(client, async_session):
    async_session.execute.return_value = db_result(scalar=None)

    response = client.get("/api/sessions/5/report.pdf")

    assert response.status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unknown_route_uses_error_format(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["error_code"] == "TAG-404"


def test_error_transaction_id_matches_request_id(client):
    response = client.get("/api/nothing-here", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    assert response.json()["transaction_id"] == "req-42"
