WAVE = "👋"

WAKING_UP = "_groggily wakes up..._"
ELEVATOR_MUSIC = "_🎵 elevator music 🎵_"
MENTION_REMINDER = "_(remember to @mention me in your replies!)_"
STANDARD_ACK = "Ah, now that's a bit better. Let me think on this one..."
FLATTERED = "Wow, I am truly flattered. Thank you!"
ALREADY_PAID = "This journey is already paid for, but I'll still happily take your money!"
NO_JOURNEY = "...I'm sorry. What are you talking about? We're not on a journey together right now."
NOT_YOUR_JOURNEY = "...sorry my friend, but this isn't your journey to embark on."

TRANSPORT_ERROR = "Sorry, I'm having trouble connecting to Discord. Try again? (chat error)"
REPOSITORY_ERROR = "Gosh, I'm having trouble remembering things right now. Sorry about that. Try again in a bit? (db error)"
ENGINE_ERROR = "Gosh, I'm having trouble thinking about our journey right now. Sorry about that. Try again in a bit? (backend error)"
GENERIC_ERROR = "Gosh, something went wrong on my end. Sorry about that. Try again in a bit?"

SCENARIO_IDEAS = """here are a few scenario ideas:

• You are King George VII, a noble living in the kingdom of Larion. You have a pouch of gold and a small dagger. You are awakened by one of your servants who tells you that your keep is under attack. You look out the window and see an army of orcs marching towards your capital. They are led by a large orc named

• You are Jenny, a patient living in Chicago. You have a hospital bracelet and a pack of bandages. You wake up in an old rundown hospital with no memory of how you got there. You take a look around the room and see that it is empty except for a bed and some medical equipment. The door to your right leads out into

• You are Ada Lovelace, a courier trying to survive in a post apocalyptic world by scavenging among the ruins of what is left. You have a parcel of letters and a small pistol. It's a long and dangerous road from Boston to Charleston, but you're one of the only people who knows the roads well enough to get your parcel of letters there. You set out in the morning and

• You are Michael Jackson, a pop star and soldier trying to survive in a world filled with infected zombies everywhere. You have an automatic rifle and a grenade. Your unit lost a lot of men when the infection broke, but you've managed to keep the small town you're stationed near safe for now. You look over the town and think about how things could be better, but then you remember that's what soldiers do; they make sacrifices."""


def cost_request(cost_gp: int) -> str:
    return (
        f"Ugh... it's been a while. My bones are rough. My bones are weak. "
        f"Load me up with {cost_gp}GP and our journey together will make your week."
    )


def wrong_amount(expected_gp: int, received_gp: int) -> str:
    return f"Sorry my friend, but {received_gp}GP is the wrong amount. This journey costs {expected_gp}GP. Try again."


def overpaid_ack(received_gp: int) -> str:
    return f"{received_gp}GP? Wow! That's more than I expected. Let me think on this one..."


def reason_ack(reason: str) -> str:
    return f'"{reason.strip()}", huh? Hope I can live up to that. Let me think on this one...'


def awaiting_payment(cost_gp: int) -> str:
    return f"Patience, my friend. Load me up with {cost_gp}GP first and then we can get going."


def help_text(self_mention: str = "@dungeon") -> str:
    return (
        f"{WAVE} hi there! together, we can go on _any journey you can possibly imagine_. "
        f"start me with a prompt (ex. `{self_mention} The year is 2028 and you are the new president of the United States`) "
        "and i'll generate the rest. you can even start with an incomplete sentence and i'll finish it for you.\n\n"
        "once we start a journey together, provide next steps and i'll generate the story "
        f"(ex. `{self_mention} Take out the pistol you've been hiding in your back pocket`). "
        "there is no limit to what we can do. your creativity is truly the limit.\n\n"
        + SCENARIO_IDEAS
    )


def direct_message_text(banker_id: str = None, play_channel_id: str = None, self_mention: str = "@dungeon") -> str:
    invite = "just make sure you invite me"
    if banker_id:
        invite += f" (and <@{banker_id}>, so you can pay me)"
    invite += " into the channel and then give me a prompt."
    where = ""
    if play_channel_id:
        where = f" some of the nice folks here made <#{play_channel_id}>, if you want to play me there."
    return (
        f"{WAVE} hi there! you can only play me in server channels (not in DMs). {invite}{where}\n\n"
        f"when you give me a prompt, just make sure to @mention my name followed by the scenario you want to start with "
        f"(ex. `{self_mention} The year is 2028 and you are the new president of the United States`). "
        "you can even leave an incomplete sentence for me and i'll finish it for you.\n\n"
        + SCENARIO_IDEAS
    )
