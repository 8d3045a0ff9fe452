def test_detail_shows_record(pages, fake_api):
    job = fake_api.add(
        title="Platform Engineer",
        company="Acme",
        status="OFFER",
        applied_date="2026-10-19",
        deadline=None,
        notes="Negotiate start date",
    )
    res = pages.get(f"/jobs/{job['id']}")
    assert res.status_code == 200
    html = res.text
    assert "Platform Engineer" in html
    assert "October 19, 2026" in html
    assert "Not specified" in html
    assert "Negotiate start date" in html
    assert "Created: 10/19/2026, 3:04:05 PM UTC" in html
    assert "bg-green-100 text-green-800" in html
    assert f'href="/jobs/{job["id"]}/delete"' in html


def test_detail_hides_empty_notes(pages, fake_api):
    job = fake_api.add(notes=None)
    assert ">Notes<" not in pages.get(f"/jobs/{job['id']}").text


def test_detail_missing_redirects(pages):
    res = pages.get("/jobs/99", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/jobs"


def test_change_status(pages, fake_api):
    job = fake_api.add()
    res = pages.post(f"/jobs/{job['id']}/status", data={"status": "INTERVIEW"}, follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == f"/jobs/{job['id']}"
    assert fake_api.calls_to("set_status") == [((job["id"], "INTERVIEW"), {})]

    assert "Status changed to Interview" in pages.get(f"/jobs/{job['id']}").text


def test_change_status_rejects_unknown_value(pages, fake_api):
    job = fake_api.add()
    res = pages.post(f"/jobs/{job['id']}/status", data={"status": "GHOSTED"}, follow_redirects=False)
    assert res.status_code == 303
    assert fake_api.calls_to("set_status") == []


def test_delete_requires_confirmation(pages, fake_api):
    job = fake_api.add(title="Data Engineer", company="Globex")

    res = pages.get(f"/jobs/{job['id']}/delete")
    assert res.status_code == 200
    assert "Are you sure you want to delete this application?" in res.text
    assert "Data Engineer" in res.text
    assert fake_api.calls_to("delete") == []

    res2 = pages.post(f"/jobs/{job['id']}/delete", follow_redirects=False)
    assert res2.status_code == 303
    assert res2.headers["location"] == "/jobs"
    assert fake_api.calls_to("delete") == [((job["id"],), {})]
    assert "Job application deleted successfully" in pages.get("/jobs").text


def test_delete_missing_job(pages, fake_api):
    res = pages.post("/jobs/5/delete", follow_redirects=False)
    assert res.status_code == 303
    assert "Job application not found" in pages.get("/jobs").text
