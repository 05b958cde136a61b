from spgen import generate_batch

def main() -> None:
    passwords = generate_batch()  # uses DEFAULT_CONFIG from config.py
    print("\n[Secure Password Generator]")
    for password in passwords:
        print(f"  {password}")
    print()

if __name__ == "__main__":
    main()
