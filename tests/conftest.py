import io
import json
import re
import sys
from pathlib import Path
from urllib.error import HTTPError
from urllib.parse import parse_qs, urlsplit

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
import bp_cli.core.config as config
from bp_cli.__main__ import main
from bp_cli.core.utils import slugify

SITE = "https://example.com"
EMAIL_ROUTES = ("wp/v2/bp-email", "buddypress/v1/emails")


class FakeResponse:
    def __init__(self, body, headers=None):
        self._body = b"" if body is None else json.dumps(body).encode("utf-8")
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class RestError(Exception):
    def __init__(self, status, code, message):
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message


def _truthy(value):
    return str(value).lower() in ("1", "true")


def _text(value):
    return {"raw": value, "rendered": f"<p>{value}</p>" if value else ""}


class FakeBuddyPress:
    """In-memory stand-in for the REST endpoints the CLI talks to."""

    def __init__(self):
        self._next = 0
        self.groups = {}
        self.field_groups = {}
        self.fields = {}
        self.data = {}
        self.users = {}
        self.email_posts = {}
        self.email_terms = {}
        self.reinstall_result = {"code": 0, "message": "Emails have been successfully reinstalled."}
        self.requests = []
        self.failures = []

    # --- helpers -----------------------------------------------------------

    def next_id(self):
        self._next += 1
        return self._next

    def fail(self, method, pattern, status=500, code="db_error", message="Database error."):
        self.failures.append((method, re.compile(pattern), status, code, message))

    def add_user(self, username, name=None):
        uid = self.next_id()
        self.users[uid] = {"id": uid, "username": username, "slug": username, "name": name or username}
        return uid

    def add_field_group(self, name, can_delete=True):
        gid = self.next_id()
        self.field_groups[gid] = {
            "id": gid,
            "name": name,
            "description": _text(""),
            "group_order": 0,
            "can_delete": can_delete,
        }
        return gid

    def add_field(self, group_id, name, type="textbox"):
        fid = self.next_id()
        self.fields[fid] = {
            "id": fid,
            "group_id": group_id,
            "parent_id": 0,
            "type": type,
            "name": name,
            "description": _text(""),
            "is_required": False,
            "can_delete": True,
            "field_order": 0,
            "order_by": "",
        }
        return fid

    def add_email_type(self, slug, subject="Subject", content="Content"):
        tid = self.next_id()
        self.email_terms[tid] = {"id": tid, "slug": slug, "name": slug, "description": ""}
        pid = self._create_post({"title": subject, "content": content, "status": "publish"})
        self.email_posts[pid]["bp-email-type"] = [tid]
        return pid

    def sites(self):
        return [r[0] for r in self.requests]

    # --- transport ---------------------------------------------------------

    def urlopen(self, req, timeout=60):
        parts = urlsplit(req.full_url)
        site, _, route = (parts.scheme + "://" + parts.netloc + parts.path).partition("/wp-json/")
        params = {k: v[-1] for k, v in parse_qs(parts.query).items()}
        body = json.loads(req.data.decode("utf-8")) if req.data else {}
        method = req.get_method()
        self.requests.append((site, method, route, params, body))
        try:
            for f_method, f_re, status, code, message in self.failures:
                if f_method == method and f_re.search(route):
                    raise RestError(status, code, message)
            if site != SITE and route.startswith(EMAIL_ROUTES):
                # email templates only exist on the primary site
                result = [] if method == "GET" else self.dispatch_missing()
            else:
                result = self.dispatch(method, route, params, body)
        except RestError as e:
            payload = json.dumps({"code": e.code, "message": e.message, "data": {"status": e.status}})
            raise HTTPError(req.full_url, e.status, e.message, None, io.BytesIO(payload.encode("utf-8")))
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse(result)

    def dispatch(self, method, route, params, body):
        routes = [
            (r"buddypress/v1/groups", self.groups_collection),
            (r"buddypress/v1/groups/(\d+)", self.group_item),
            (r"buddypress/v1/xprofile/groups", self.field_groups_collection),
            (r"buddypress/v1/xprofile/groups/(\d+)", self.field_group_item),
            (r"buddypress/v1/xprofile/fields", self.fields_collection),
            (r"buddypress/v1/xprofile/fields/(\d+)", self.field_item),
            (r"buddypress/v1/xprofile/(\d+)/data/(\d+)", self.field_data),
            (r"buddypress/v1/emails/reinstall", self.reinstall),
            (r"wp/v2/users", self.users_collection),
            (r"wp/v2/users/(\d+)", self.user_item),
            (r"wp/v2/bp-email-type", self.terms_collection),
            (r"wp/v2/bp-email-type/(\d+)", self.term_item),
            (r"wp/v2/bp-email", self.posts_collection),
            (r"wp/v2/bp-email/(\d+)", self.post_item),
        ]
        for pattern, handler in routes:
            m = re.fullmatch(pattern, route)
            if m:
                return handler(method, params, body, *(int(g) for g in m.groups()))
        self.dispatch_missing()

    def dispatch_missing(self):
        raise RestError(404, "rest_no_route", "No route was found matching the URL and request method.")

    def _page(self, items, params):
        page = int(params.get("page", 1))
        per_page = int(params.get("per_page", 10))
        total_pages = max(1, -(-len(items) // per_page))
        chunk = items[(page - 1) * per_page: page * per_page]
        return FakeResponse(chunk, {"X-WP-Total": str(len(items)), "X-WP-TotalPages": str(total_pages)})

    # --- groups ------------------------------------------------------------

    def _group_link(self, group):
        group["link"] = f"{SITE}/groups/{group['slug']}/"

    def groups_collection(self, method, params, body):
        if method == "POST":
            gid = self.next_id()
            group = {
                "id": gid,
                "creator_id": body.get("creator_id", 1),
                "parent_id": 0,
                "name": body["name"],
                "slug": body["slug"],
                "description": _text(body.get("description", "")),
                "status": body.get("status", "public"),
                "enable_forum": body.get("enable_forum", False),
                "date_created": "2026-10-18T12:00:00",
            }
            self._group_link(group)
            self.groups[gid] = group
            return [group]
        items = sorted(self.groups.values(), key=lambda g: g["id"])
        if "slug" in params:
            items = [g for g in items if g["slug"] == params["slug"]]
        if "status" in params:
            items = [g for g in items if g["status"] == params["status"]]
        if "search" in params:
            items = [g for g in items if params["search"].lower() in g["name"].lower()]
        return self._page(items, params)

    def group_item(self, method, params, body, gid):
        group = self.groups.get(gid)
        if group is None:
            raise RestError(404, "bp_rest_group_invalid_id", "Invalid group ID.")
        if method == "GET":
            return [group]
        if method == "PUT":
            for key in ("name", "slug", "status", "enable_forum"):
                if key in body:
                    group[key] = body[key]
            if "description" in body:
                group["description"] = _text(body["description"])
            self._group_link(group)
            return [group]
        if method == "DELETE":
            del self.groups[gid]
            return {"deleted": True, "previous": group}
        raise RestError(405, "rest_no_route", "Method not allowed.")

    # --- xprofile ----------------------------------------------------------

    def field_groups_collection(self, method, params, body):
        if method == "POST":
            gid = self.add_field_group(body["name"], body.get("can_delete", True))
            self.field_groups[gid]["description"] = _text(body.get("description", ""))
            return [self.field_groups[gid]]
        groups = []
        for gid in sorted(self.field_groups):
            if "profile_group_id" in params and int(params["profile_group_id"]) != gid:
                continue
            group = dict(self.field_groups[gid])
            if _truthy(params.get("fetch_fields")):
                # nested fields come back in field_order, not id order
                group["fields"] = [dict(f) for f in sorted(
                    (f for f in self.fields.values() if f["group_id"] == gid),
                    key=lambda f: -f["id"],
                )]
            groups.append(group)
        return groups

    def field_group_item(self, method, params, body, gid):
        group = self.field_groups.get(gid)
        if group is None:
            raise RestError(404, "bp_rest_invalid_id", "Invalid field group ID.")
        if method == "GET":
            return [group]
        if method == "DELETE":
            if not group["can_delete"]:
                return {"deleted": False, "previous": group}
            del self.field_groups[gid]
            return {"deleted": True, "previous": group}
        raise RestError(405, "rest_no_route", "Method not allowed.")

    def fields_collection(self, method, params, body):
        if method != "POST":
            raise RestError(405, "rest_no_route", "Method not allowed.")
        if body["group_id"] not in self.field_groups:
            raise RestError(400, "bp_rest_invalid_group", "Invalid field group ID.")
        fid = self.add_field(body["group_id"], body["name"], body["type"])
        self.fields[fid]["description"] = _text(body.get("description", ""))
        self.fields[fid]["is_required"] = body.get("required", False)
        return [self.fields[fid]]

    def field_item(self, method, params, body, fid):
        field = self.fields.get(fid)
        if field is None:
            raise RestError(404, "bp_rest_invalid_id", "Invalid field ID.")
        if method == "GET":
            return [field]
        if method == "DELETE":
            del self.fields[fid]
            if _truthy(params.get("delete_data")):
                self.data = {k: v for k, v in self.data.items() if k[0] != fid}
            return {"deleted": True, "previous": field}
        raise RestError(405, "rest_no_route", "Method not allowed.")

    def field_data(self, method, params, body, fid, uid):
        if fid not in self.fields:
            raise RestError(404, "bp_rest_invalid_id", "Invalid field ID.")
        if uid not in self.users:
            raise RestError(404, "bp_rest_member_invalid_id", "Invalid member ID.")
        if method == "POST":
            self.data[(fid, uid)] = body["value"]
        return [{"field_id": fid, "user_id": uid, "value": {"raw": self.data.get((fid, uid))}}]

    # --- users -------------------------------------------------------------

    def users_collection(self, method, params, body):
        term = params.get("search", "").lower()
        found = [
            u for u in self.users.values()
            if term in u["username"].lower() or term in u["name"].lower()
        ]
        return found

    def user_item(self, method, params, body, uid):
        if uid not in self.users:
            raise RestError(404, "rest_user_invalid_id", "Invalid user ID.")
        return self.users[uid]

    # --- emails ------------------------------------------------------------

    def terms_collection(self, method, params, body):
        if method == "POST":
            slug = slugify(body.get("slug") or body["name"])
            if any(t["slug"] == slug for t in self.email_terms.values()):
                raise RestError(400, "term_exists", "A term with the name provided already exists.")
            tid = self.next_id()
            self.email_terms[tid] = {"id": tid, "slug": slug, "name": body["name"], "description": ""}
            return self.email_terms[tid]
        slug = slugify(params.get("slug", ""))
        return [t for t in self.email_terms.values() if t["slug"] == slug]

    def term_item(self, method, params, body, tid):
        term = self.email_terms.get(tid)
        if term is None:
            raise RestError(404, "rest_term_invalid", "Term does not exist.")
        if method == "DELETE":
            del self.email_terms[tid]
            return {"deleted": True, "previous": term}
        if method == "POST" and "description" in body:
            term["description"] = body["description"]
        return term

    def _create_post(self, body):
        pid = self.next_id()
        self.email_posts[pid] = {
            "id": pid,
            "date": "2026-10-18T12:00:00",
            "modified": "2026-10-18T12:00:00",
            "slug": f"email-{pid}",
            "status": body.get("status", "draft"),
            "type": "bp-email",
            "title": _text(body.get("title", "")),
            "content": _text(body.get("content", "")),
            "excerpt": _text(body.get("excerpt", "")),
            "link": f"{SITE}/?bp-email={pid}",
            "bp-email-type": [],
        }
        return pid

    def posts_collection(self, method, params, body):
        if method == "POST":
            return self.email_posts[self._create_post(body)]
        items = list(self.email_posts.values())
        if "bp-email-type" in params:
            tid = int(params["bp-email-type"])
            items = [p for p in items if tid in p["bp-email-type"]]
        return items[: int(params.get("per_page", 10))]

    def post_item(self, method, params, body, pid):
        post = self.email_posts.get(pid)
        if post is None:
            raise RestError(404, "rest_post_invalid_id", "Invalid post ID.")
        if method == "DELETE":
            del self.email_posts[pid]
            return {"deleted": True, "previous": post}
        if method == "POST" and "bp-email-type" in body:
            post["bp-email-type"] = list(body["bp-email-type"])
        return post

    def reinstall(self, method, params, body):
        return self.reinstall_result


@pytest.fixture
def bp(monkeypatch, tmp_path):
    fake = FakeBuddyPress()
    monkeypatch.setattr("bp_cli.core.http.urlopen", fake.urlopen)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / ".bp-cli.json")
    monkeypatch.setenv("BP_CLI_URL", SITE)
    for env in ("BP_CLI_ROOT_URL", "BP_CLI_USER", "BP_CLI_PASSWORD"):
        monkeypatch.delenv(env, raising=False)
    return fake


@pytest.fixture
def run():
    """Run the CLI in process and return its exit code."""

    def _run(*argv):
        try:
            code = main(list(argv))
        except SystemExit as e:
            code = e.code
        return code or 0

    return _run
