"""
Transactions — book a trip, undo what was booked when a step fails.

    chain     flight, then hotel (hotel needs the flight booking)
    ap        car and insurance booked concurrently
"""

from kungfu import Ok, Error
from undoable import tx as T
from examples._infra import banner, run, Failure


# Mock APIs
async def book_flight(flight: str) -> str:
    print(f"  ✓ Book flight: {flight}")
    return "FL-001"


async def cancel_flight(booking_id: str) -> None:
    print(f"  ← Cancel flight: {booking_id}")


async def book_hotel(flight_id: str) -> str:
    print(f"  ✗ Book hotel for {flight_id}")
    raise ValueError("No rooms available")


async def cancel_hotel(booking_id: str) -> None:
    print(f"  ← Cancel hotel: {booking_id}")


async def book_car() -> str:
    print("  ✓ Book car")
    return "CAR-7"


async def cancel_car(booking_id: str) -> None:
    print(f"  ← Cancel car: {booking_id}")


async def buy_insurance() -> str:
    print("  ✓ Buy insurance")
    return "INS-3"


async def refund_insurance(policy_id: str) -> None:
    print(f"  ← Refund insurance: {policy_id}")


def on_error(e: Exception) -> Failure:
    return Failure(str(e))


async def main() -> None:
    banner("Transaction: Book Trip")

    extras = (
        T.of(lambda car: lambda insurance: (car, insurance))
        .ap(T.from_async(book_car, on_error=on_error, undo=cancel_car))
        .ap(T.from_async(buy_insurance, on_error=on_error, undo=refund_insurance))
    )

    trip = (
        T.from_async(lambda: book_flight("NYC→LON"), on_error=on_error, undo=cancel_flight)
        .chain(lambda flight: extras.map(lambda pair: (flight, *pair)))
        .chain(lambda booked: T.from_async(
            lambda: book_hotel(booked[0]),
            on_error=on_error,
            undo=cancel_hotel,
        ))
    )

    print("\nCommitting...")
    result = await T.run(trip)

    match result:
        case Ok(r):
            print(f"\n✓ Success: {r.value}")
        case Error(e):
            print(f"\n✗ Failed: {e.error}")
            print(f"  Rolled back: {e.rollback_complete}")


if __name__ == "__main__":
    run(main)
