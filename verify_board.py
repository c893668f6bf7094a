#!/usr/bin/env python3
"""
Quick verification that the project board works end-to-end.
"""
from projectboard.board import Board
from projectboard.schema import ProjectStatus


def main() -> int:
    print("=" * 60)
    print("Project Board Verification")
    print("=" * 60)

    print("\n[1/5] Building board (store, input form, two lanes)...")
    board = Board()
    active = board.lane(ProjectStatus.ACTIVE)
    finished = board.lane(ProjectStatus.FINISHED)
    print("✅ Board built")

    print("\n[2/5] Submitting an invalid form...")
    board.project_input.fill(title="", description="tiny", people="9")
    if board.project_input.submit() is not None:
        print("❌ Invalid input was accepted")
        return 1
    print(f"✅ Rejected: {board.surface.alerts[-1]}")

    print("\n[3/5] Submitting a valid form...")
    board.project_input.fill(title="Build CLI", description="A short desc", people="3")
    project = board.project_input.submit()
    if project is None:
        print("❌ Valid input was rejected")
        return 1
    print(f"✅ Project created: {project.id}")
    print(f"   Active lane:   {list(active.rendered_ids)}")
    print(f"   Finished lane: {list(finished.rendered_ids)}")

    print("\n[4/5] Dragging the card onto the finished lane...")
    board.drag_project(project.id, ProjectStatus.FINISHED)
    moved = board.state.get(project.id)
    if moved is None or moved.status != ProjectStatus.FINISHED:
        print("❌ Project did not move")
        return 1
    print(f"✅ Status: {moved.status.value}")
    print(f"   Active lane:   {list(active.rendered_ids)}")
    print(f"   Finished lane: {list(finished.rendered_ids)}")

    print("\n[5/5] Dropping a foreign payload...")
    board.drag_project("prj-unknown", ProjectStatus.ACTIVE)
    print(f"✅ Board unchanged: {board.state.counts()}")

    print("\n" + "=" * 60)
    print("✅ ALL CHECKS PASSED")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
