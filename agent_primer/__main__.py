from agent_primer.cli import main

main()
