from __future__ import annotations

from resume_qa.ask import build_service
from resume_qa.config import load_settings

SHOW_CHARS = 500  # show first 500 chars of each match


def main():
    settings = load_settings()
    service = build_service(settings)

    while True:
        q = input("\nAsk a question (or type exit): ").strip()
        if q.lower() == "exit":
            break
        if not q:
            continue

        routed = service.retrieve(q)
        print(f"\n--- TOP MATCHES (hint={routed.domain_hint}, ensure={routed.ensure_terms}) ---")
        if not routed.results:
            print("No matching chunks.")
        for c in routed.results:
            print(f"\n[{c.cid}]  score={c.score:.3f}  chunk={c.id}  {c.domain}/{c.source}")
            print(c.text[:SHOW_CHARS])


if __name__ == "__main__":
    main()
