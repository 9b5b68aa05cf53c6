import json


def verification_report(result):
    payload = {
        "bug_id": result.get("bug_id"),
        "status": result.get("status"),
        "pull": f"{result.get('org')}/{result.get('repo')}#{result.get('number')}",
        "approved": result.get("approved", False),
        "qa_contacts": result.get("qa_contacts", []),
    }
    return "QA_VERIFY_REPORT " + json.dumps(payload, sort_keys=True)
